#!/usr/bin/env python3
"""
Cron endpoint - batch refresh of stale profile recommendations.
"""

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException

from core.config_loader import AppConfig
from ..dependencies import get_app_config, get_recommendation_service
from ..services.recommendation_service import RecommendationService
from ..models.requests import CronRefreshRequest
from ..models.responses import CronRefreshResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cron", tags=["cron"])


def verify_cron_secret(
    authorization: Optional[str] = Header(default=None),
    config: AppConfig = Depends(get_app_config)
) -> None:
    """Require 'Authorization: Bearer <secret>' when a cron secret is configured."""
    secret = config.cron.secret
    if not secret:
        return
    expected = f"Bearer {secret}"
    if authorization is None or not hmac.compare_digest(authorization, expected):
        logger.warning("Unauthorized cron refresh request")
        raise HTTPException(status_code=401, detail="Unauthorized")


@router.post(
    "/refresh-recommendations",
    response_model=CronRefreshResponse,
    dependencies=[Depends(verify_cron_secret)],
)
def refresh_recommendations(
    body: Optional[CronRefreshRequest] = Body(default=None),
    service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Refresh stale profiles of one partition.

    Body:
    - partition omitted or null: all stale profiles
    - partition 0-6: profiles whose id maps to that partition
    - partition "auto": today's partition (UTC weekday, Sunday = 0)
    """
    partition = body.partition if body is not None else None
    return service.refresh(partition)
