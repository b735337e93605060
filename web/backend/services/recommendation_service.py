#!/usr/bin/env python3
"""
Recommendation service - business logic behind the recommendation endpoints.
"""

import logging
import time
from datetime import datetime, timezone
from typing import List

from core.app_context import AppContext
from core.exceptions import ProfileNotFoundError, RecommendationError
from pipeline.models import BatchRefreshResult, RecommendationResult
from pipeline.partition import PartitionArg
from ..models.responses import (
    CronRefreshResponse,
    CronRefreshResults,
    RecalculateResponse,
    RecommendationItem,
)
from ..exceptions import (
    InvalidPartitionException,
    RecommendationNotFoundException,
    RefreshFailedException,
)

logger = logging.getLogger(__name__)


class RecommendationService:
    """Service for computing and reading profile recommendations."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    def recalculate(self, profile_id: str, mode: str = "full") -> RecalculateResponse:
        """
        Recompute recommendations of a profile.

        Raises:
            RefreshFailedException: 404 when the profile is missing, 500 on any other failure.
        """
        start_time = time.monotonic()
        try:
            result: RecommendationResult = self.ctx.orchestrator.recalculate(profile_id, mode)
        except RecommendationError as e:
            elapsed = int((time.monotonic() - start_time) * 1000)
            status_code = 404 if isinstance(e, ProfileNotFoundError) else 500
            raise RefreshFailedException(str(e), status_code=status_code, processing_time_ms=elapsed) from e
        except Exception as e:
            elapsed = int((time.monotonic() - start_time) * 1000)
            logger.exception(f"Unexpected error refreshing profile {profile_id}")
            raise RefreshFailedException(str(e), status_code=500, processing_time_ms=elapsed) from e

        return RecalculateResponse(
            profile_id=result.profile_id,
            total_matches=result.total_matches,
            new_matches=result.new_matches,
            processing_time_ms=result.processing_time_ms,
            mode=result.mode.value,
        )

    def refresh(self, partition: PartitionArg = None) -> CronRefreshResponse:
        """
        Run a cron batch refresh.

        Raises:
            InvalidPartitionException: partition is not None, 0-6 or "auto".
        """
        try:
            result: BatchRefreshResult = self.ctx.cron_driver.run(partition)
        except ValueError as e:
            raise InvalidPartitionException(str(e)) from e

        return CronRefreshResponse(
            success=True,
            message="No profiles need refresh" if result.profiles_processed == 0 else None,
            profiles_processed=result.profiles_processed,
            partition=result.partition_label,
            total_partitions=result.total_partitions,
            results=CronRefreshResults(
                success=result.success,
                failed=result.failed,
                errors=list(result.errors),
            ),
            processing_time_ms=result.processing_time_ms,
        )

    def list_recommendations(self, profile_id: str, include_dismissed: bool = False) -> List[RecommendationItem]:
        """Stored recommendations of a profile, highest score first."""
        with self.ctx.uow_factory() as uow:
            stored = uow.recommendations.list_for_profile(profile_id, include_dismissed=include_dismissed)

        return [
            RecommendationItem(
                subsidy_id=rec.subsidy_id,
                title=rec.title,
                agency=rec.agency,
                match_score=rec.match_score,
                match_reasons=rec.match_reasons,
                first_matched_at=rec.first_matched_at,
                dismissed_at=rec.dismissed_at,
                deadline=rec.deadline,
                amount_max=rec.amount_max,
            )
            for rec in stored
        ]

    def dismiss(self, profile_id: str, subsidy_id: str) -> None:
        """
        Hide a recommendation from the profile's active list.

        Raises:
            RecommendationNotFoundException: no such recommendation.
        """
        dismissed_at = datetime.now(timezone.utc)
        with self.ctx.uow_factory() as uow:
            found = uow.recommendations.dismiss(profile_id, subsidy_id, dismissed_at)
            if found:
                uow.profiles.update_recommendation_count(
                    profile_id, uow.recommendations.count_active(profile_id)
                )

        if not found:
            raise RecommendationNotFoundException(
                f"Recommendation not found for profile {profile_id} and subsidy {subsidy_id}"
            )
        logger.info(f"Dismissed subsidy {subsidy_id} for profile {profile_id}")
