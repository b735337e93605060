"""
Storage Interfaces - Abstract boundaries of the recommendation pipeline.

The orchestrator and cron driver only talk to these interfaces. The SQL
implementations live in database/repositories; tests use in-memory fakes.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Callable, ContextManager, List, Optional, Sequence

from core.analyzer.models import ProfileInput
from core.scorer.models import MatchRecord, StoredRecommendation, SubsidyCandidate


class ProfileStore(ABC):
    """Read and stamp company profiles."""

    @abstractmethod
    def get_profile(self, profile_id: str) -> Optional[ProfileInput]:
        """Returns None when the profile does not exist."""
        pass

    @abstractmethod
    def stamp_refresh(self, profile_id: str, refreshed_at: datetime) -> None:
        """Set last_subsidy_refresh_at."""
        pass

    @abstractmethod
    def update_recommendation_count(self, profile_id: str, count: int) -> None:
        pass

    @abstractmethod
    def find_stale_profiles(self, cutoff: datetime) -> List[ProfileInput]:
        """
        Profiles never refreshed or last refreshed before cutoff.

        Ordered by last_subsidy_refresh_at ascending, never-refreshed first.
        """
        pass


class CandidateRepository(ABC):
    """Read-only source of subsidies eligible for matching."""

    @abstractmethod
    def fetch_candidates(self, today: date, since: Optional[datetime] = None) -> List[SubsidyCandidate]:
        """
        Active, business-relevant subsidies whose deadline is unset or >= today.

        When since is given, only subsidies created at or after it.
        """
        pass


class RecommendationStore(ABC):
    """Persisted (profile, subsidy) matches."""

    @abstractmethod
    def insert_batch(self, records: Sequence[MatchRecord]) -> int:
        """
        Insert records, ignoring pairs that already exist.

        Returns: number of rows actually inserted
        """
        pass

    @abstractmethod
    def count_active(self, profile_id: str) -> int:
        """Recommendations of the profile that were not dismissed."""
        pass

    @abstractmethod
    def delete_expired(self, today: date) -> int:
        """Delete rows whose subsidy is inactive or past its deadline. Returns rows deleted."""
        pass

    @abstractmethod
    def list_for_profile(self, profile_id: str, include_dismissed: bool = False) -> List[StoredRecommendation]:
        """Recommendations of the profile, highest score first."""
        pass

    @abstractmethod
    def dismiss(self, profile_id: str, subsidy_id: str, dismissed_at: datetime) -> bool:
        """Mark a recommendation dismissed. Returns False when it does not exist."""
        pass


# A unit of work exposes .profiles, .subsidies and .recommendations and
# commits on successful exit of the context manager.
UnitOfWorkFactory = Callable[[], ContextManager[Any]]
