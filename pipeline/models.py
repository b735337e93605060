"""Result types of the recommendation refresh pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class RefreshMode(str, Enum):
    FULL = "full"
    INCREMENTAL = "incremental"


@dataclass
class RecommendationResult:
    """Outcome of one profile refresh."""
    profile_id: str
    total_matches: int
    new_matches: int
    processing_time_ms: int
    mode: RefreshMode


@dataclass
class BatchRefreshResult:
    """Outcome of one cron batch run."""
    profiles_processed: int = 0
    success: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    partition: Optional[int] = None  # None = all partitions
    total_partitions: int = 7
    processing_time_ms: int = 0

    @property
    def partition_label(self) -> Union[int, str]:
        return 'all' if self.partition is None else self.partition
