"""Recommendation refresh pipeline modules."""

from .models import RefreshMode, RecommendationResult, BatchRefreshResult
from .orchestrator import RefreshOrchestrator
from .cron import PartitionedCronDriver
from .partition import get_profile_partition, resolve_partition

__all__ = [
    'RefreshMode',
    'RecommendationResult',
    'BatchRefreshResult',
    'RefreshOrchestrator',
    'PartitionedCronDriver',
    'get_profile_partition',
    'resolve_partition',
]
