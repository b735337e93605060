import contextlib
import logging

from database.database import SessionLocal
from database.repository import RefreshRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def refresh_uow(session_factory=None):
    """One profile refresh (or one cron selection/cleanup step) in one transaction.

    Yields a RefreshRepository whose stores share a Session. Commits when the
    block exits normally, rolls back and re-raises otherwise.

        with refresh_uow() as uow:
            profile = uow.profiles.get_profile(profile_id)
            uow.recommendations.insert_batch(records)

    session_factory defaults to the configured SessionLocal; tests pass a
    factory bound to their own engine.
    """
    session = (session_factory or SessionLocal)()
    try:
        yield RefreshRepository(session)
        session.commit()
    except Exception:
        logger.debug("Rolling back refresh unit of work")
        session.rollback()
        raise
    finally:
        session.close()
