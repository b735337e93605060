import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session


def to_uuid(value: Any) -> Optional[uuid.UUID]:
    """Parse an id coming from the API or the pipeline. Returns None when it is not a UUID."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; all stored timestamps are UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db
