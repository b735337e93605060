"""Recommendation refresh for a single profile.

Runs the whole per-profile flow inside one unit of work:
load profile -> analyze -> fetch candidates -> rank -> persist -> stamp -> count.
Used by the HTTP recalculate endpoint, the CLI and the cron driver.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from core.analyzer import analyze_profile
from core.config_loader import MatchingConfig
from core.exceptions import CandidateFetchError, ProfileNotFoundError
from core.interfaces import UnitOfWorkFactory
from core.scorer import ScoringEngine
from core.scorer.persistence import persist_matches, to_match_records
from pipeline.models import RecommendationResult, RefreshMode

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshOrchestrator:
    """
    Recompute and persist the recommendations of one profile.

    Args:
        uow_factory: returns a context manager yielding an object with
            .profiles, .subsidies and .recommendations
        config: matching configuration (analyzer, scorer, refresh sections)
        engine: scoring engine, built from config.scorer when omitted
        clock: returns the current aware UTC datetime
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        config: Optional[MatchingConfig] = None,
        engine: Optional[ScoringEngine] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.uow_factory = uow_factory
        self.config = config or MatchingConfig()
        self.engine = engine or ScoringEngine(self.config.scorer)
        self.clock = clock or _utcnow

    def recalculate(
        self,
        profile_id: str,
        mode: Union[RefreshMode, str] = RefreshMode.FULL,
    ) -> RecommendationResult:
        """
        Refresh recommendations of a profile.

        Raises:
            ProfileNotFoundError: the profile cannot be loaded
            CandidateFetchError: the candidate query failed
        """
        mode = RefreshMode(mode)
        start_time = time.monotonic()
        run_started_at = self.clock()
        refresh_config = self.config.refresh

        with self.uow_factory() as uow:
            # Step 1: Load profile
            try:
                profile = uow.profiles.get_profile(profile_id)
            except Exception as e:
                raise ProfileNotFoundError(profile_id, str(e)) from e
            if profile is None:
                raise ProfileNotFoundError(profile_id)

            # Step 2: Analyze
            analyzed = analyze_profile(profile, self.config.analyzer)

            # Step 3: Fetch candidates
            since = None
            if mode == RefreshMode.INCREMENTAL and profile.last_subsidy_refresh_at is not None:
                since = profile.last_subsidy_refresh_at
            logger.info(
                f"Refreshing recommendations for profile {profile_id} "
                f"(mode={mode.value}, since={since.isoformat() if since else 'beginning'})"
            )
            try:
                candidates = uow.subsidies.fetch_candidates(run_started_at.date(), since)
            except Exception as e:
                raise CandidateFetchError(str(e)) from e

            if not candidates:
                logger.info(f"No candidate subsidies for profile {profile_id}")
                self._stamp(uow, profile_id, run_started_at)
                return RecommendationResult(
                    profile_id=profile_id,
                    total_matches=0,
                    new_matches=0,
                    processing_time_ms=self._elapsed_ms(start_time),
                    mode=mode,
                )

            # Step 4: Score and rank
            ranked = self.engine.rank_candidates(
                analyzed,
                candidates,
                min_score=refresh_config.min_match_score,
                max_results=refresh_config.max_results,
            )
            logger.info(
                f"{len(ranked)} of {len(candidates)} subsidies passed threshold "
                f"(score >= {refresh_config.min_match_score})"
            )

            # Step 5: Persist
            records = to_match_records(profile_id, ranked)
            new_matches = persist_matches(uow.recommendations, records, refresh_config.batch_insert_size)

            # Step 6: Stamp and count
            self._stamp(uow, profile_id, run_started_at)
            try:
                total_matches = uow.recommendations.count_active(profile_id)
            except Exception as e:
                logger.error(f"Failed to count recommendations for profile {profile_id}: {e}")
                total_matches = new_matches
            else:
                try:
                    uow.profiles.update_recommendation_count(profile_id, total_matches)
                except Exception as e:
                    logger.warning(f"Failed to update recommendation count for profile {profile_id}: {e}")

        result = RecommendationResult(
            profile_id=profile_id,
            total_matches=total_matches,
            new_matches=new_matches,
            processing_time_ms=self._elapsed_ms(start_time),
            mode=mode,
        )
        logger.info(
            f"Profile {profile_id}: {result.new_matches} new, {result.total_matches} total "
            f"in {result.processing_time_ms}ms"
        )
        return result

    def _stamp(self, uow, profile_id: str, refreshed_at: datetime) -> None:
        try:
            uow.profiles.stamp_refresh(profile_id, refreshed_at)
        except Exception as e:
            logger.error(f"Failed to stamp last_subsidy_refresh_at for profile {profile_id}: {e}")

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.monotonic() - start_time) * 1000)
