"""Partitioned batch refresh of stale profiles.

The daily cron run refreshes one partition of profiles (one seventh of the
profile base), so every profile is refreshed about once a week without a
single run touching all of them. Each profile is refreshed in incremental
mode by the RefreshOrchestrator; a failing profile is recorded and the run
moves on. Expired recommendations are cleaned up at the end of every run.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from core.analyzer.models import ProfileInput
from core.config_loader import CronConfig
from core.interfaces import UnitOfWorkFactory
from pipeline.models import BatchRefreshResult, RefreshMode
from pipeline.orchestrator import RefreshOrchestrator
from pipeline.partition import PartitionArg, get_profile_partition, resolve_partition

logger = logging.getLogger(__name__)


class PartitionedCronDriver:
    """
    Select stale profiles of a partition and refresh them.

    Args:
        uow_factory: unit of work factory used for selection and cleanup
        orchestrator: per-profile refresh
        config: cron configuration
        sleep: pause between profiles in sequential mode (seconds)
        clock: returns the current aware UTC datetime
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        orchestrator: RefreshOrchestrator,
        config: Optional[CronConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.uow_factory = uow_factory
        self.orchestrator = orchestrator
        self.config = config or CronConfig()
        self.sleep = sleep
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def select_profiles(self, partition: Optional[int]) -> List[ProfileInput]:
        """
        Stale profiles of the partition, least recently refreshed first.

        Filtering by partition happens before the per-run cap.
        """
        cutoff = self.clock() - timedelta(days=self.config.stale_threshold_days)
        with self.uow_factory() as uow:
            stale = uow.profiles.find_stale_profiles(cutoff)

        if partition is not None:
            stale = [
                p for p in stale
                if get_profile_partition(p.id, self.config.total_partitions) == partition
            ]
        return stale[:self.config.max_profiles_per_run]

    def run(self, partition: PartitionArg = None) -> BatchRefreshResult:
        """
        Run one batch.

        Args:
            partition: None for all profiles, an int partition, or "auto"
                for today's partition (UTC weekday, Sunday = 0)

        Raises:
            ValueError: invalid partition
        """
        start_time = time.monotonic()
        resolved = resolve_partition(partition, self.config.total_partitions, self.clock)
        label = 'all' if resolved is None else resolved
        logger.info(f"Starting cron refresh for partition {label}/{self.config.total_partitions}")

        profiles = self.select_profiles(resolved)
        logger.info(f"Processing {len(profiles)} stale profiles (partition {label})")

        result = BatchRefreshResult(
            profiles_processed=len(profiles),
            partition=resolved,
            total_partitions=self.config.total_partitions,
        )

        if self.config.max_workers > 1:
            self._run_parallel(profiles, result)
        else:
            self._run_sequential(profiles, result)

        self._cleanup(result)

        result.processing_time_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            f"Cron refresh done: {result.success} succeeded, {result.failed} failed "
            f"in {result.processing_time_ms}ms"
        )
        return result

    def _refresh(self, profile_id: str):
        return self.orchestrator.recalculate(profile_id, RefreshMode.INCREMENTAL)

    def _record_failure(self, result: BatchRefreshResult, profile_id: str, error: Exception) -> None:
        message = str(error) or type(error).__name__
        logger.error(f"Failed to refresh profile {profile_id}: {message}")
        result.failed += 1
        result.errors.append(f"{profile_id}: {message}")

    def _run_sequential(self, profiles: List[ProfileInput], result: BatchRefreshResult) -> None:
        timeout = self.config.profile_timeout_seconds
        delay = self.config.delay_between_profiles_ms / 1000.0

        for index, profile in enumerate(profiles):
            try:
                if timeout is None:
                    outcome = self._refresh(profile.id)
                else:
                    outcome = self._refresh_with_timeout(profile.id, timeout)
                result.success += 1
                logger.info(f"Profile {profile.id}: {outcome.new_matches} new matches")
            except Exception as e:
                self._record_failure(result, profile.id, e)

            if delay > 0 and index < len(profiles) - 1:
                self.sleep(delay)

    def _refresh_with_timeout(self, profile_id: str, timeout: float):
        # A timed-out refresh keeps running in its thread; only the wait is abandoned
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            return executor.submit(self._refresh, profile_id).result(timeout=timeout)
        except FutureTimeoutError:
            raise TimeoutError(f"Timed out after {timeout}s")
        finally:
            executor.shutdown(wait=False)

    def _run_parallel(self, profiles: List[ProfileInput], result: BatchRefreshResult) -> None:
        timeout = self.config.profile_timeout_seconds
        timed_out = False

        executor = ThreadPoolExecutor(max_workers=self.config.max_workers)
        try:
            futures = [(p.id, executor.submit(self._refresh, p.id)) for p in profiles]
            for profile_id, future in futures:
                try:
                    outcome = future.result(timeout=timeout)
                    result.success += 1
                    logger.info(f"Profile {profile_id}: {outcome.new_matches} new matches")
                except FutureTimeoutError:
                    timed_out = True
                    self._record_failure(result, profile_id, TimeoutError(f"Timed out after {timeout}s"))
                except Exception as e:
                    self._record_failure(result, profile_id, e)
        finally:
            executor.shutdown(wait=not timed_out)

    def _cleanup(self, result: BatchRefreshResult) -> None:
        today = self.clock().date()
        try:
            with self.uow_factory() as uow:
                deleted = uow.recommendations.delete_expired(today)
            logger.info(f"Cleanup removed {deleted} expired recommendations")
        except Exception as e:
            logger.error(f"Cleanup of expired recommendations failed: {e}")
            result.errors.append(f"cleanup: {e}")
