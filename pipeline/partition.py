"""
Profile partitioning for the daily cron refresh.

Each profile belongs to exactly one partition derived from the first
character of its id, so a full cycle of partitions covers every profile
once. Partition numbers follow weekday numbering with Sunday = 0.
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Union

PartitionArg = Union[None, int, str]

AUTO = "auto"


def get_profile_partition(profile_id: str, total_partitions: int = 7) -> Optional[int]:
    """
    Partition of a profile: first hex digit of its id modulo total_partitions.

    Returns None when the id does not start with a hex digit.
    """
    if not profile_id:
        return None
    try:
        return int(profile_id[0], 16) % total_partitions
    except ValueError:
        return None


def current_weekday_partition(now: datetime, total_partitions: int = 7) -> int:
    """Weekday of now in UTC, Sunday = 0 ... Saturday = 6."""
    weekday = now.astimezone(timezone.utc).weekday()  # Monday = 0
    return ((weekday + 1) % 7) % total_partitions


def resolve_partition(
    partition: PartitionArg,
    total_partitions: int = 7,
    clock: Optional[Callable[[], datetime]] = None,
) -> Optional[int]:
    """
    Normalize a partition argument.

    None means every partition, "auto" means today's partition. Integers
    (or their string form) must lie in [0, total_partitions).

    Raises:
        ValueError: the argument is not a valid partition
    """
    if partition is None:
        return None

    if isinstance(partition, str):
        value = partition.strip().lower()
        if value == AUTO:
            now = clock() if clock else datetime.now(timezone.utc)
            return current_weekday_partition(now, total_partitions)
        try:
            partition = int(value)
        except ValueError:
            raise ValueError(f"Invalid partition '{partition}': expected 0-{total_partitions - 1} or '{AUTO}'")

    if isinstance(partition, bool) or not isinstance(partition, int):
        raise ValueError(f"Invalid partition {partition!r}")
    if not 0 <= partition < total_partitions:
        raise ValueError(f"Invalid partition {partition}: expected 0-{total_partitions - 1}")
    return partition
