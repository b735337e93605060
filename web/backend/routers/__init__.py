"""API route handlers."""

from .recommendations import router as recommendations_router
from .cron import router as cron_router
