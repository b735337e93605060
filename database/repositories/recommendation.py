import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Sequence

from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.dialects import postgresql, sqlite

from core.interfaces import RecommendationStore
from core.scorer.models import MatchRecord, StoredRecommendation
from core.scorer.text import get_title
from database.models import ProfileRecommendedSubsidy, Subsidy
from database.repositories.base import BaseRepository, to_uuid, as_utc

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class RecommendationRepository(BaseRepository, RecommendationStore):
    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _DIALECT_INSERTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Conflict-ignoring insert not supported for dialect '{dialect}'")

    def insert_batch(self, records: Sequence[MatchRecord]) -> int:
        if not records:
            return 0

        now = datetime.now(timezone.utc)
        rows = [
            {
                'id': uuid.uuid4(),
                'profile_id': to_uuid(r.profile_id),
                'subsidy_id': to_uuid(r.subsidy_id),
                'match_score': int(r.match_score),
                'match_reasons': list(r.match_reasons),
                'first_matched_at': now,
            }
            for r in records
        ]

        stmt = (
            self._insert()(ProfileRecommendedSubsidy)
            .values(rows)
            .on_conflict_do_nothing(index_elements=['profile_id', 'subsidy_id'])
            .returning(ProfileRecommendedSubsidy.id)
        )

        # Savepoint: a failing batch must not poison the surrounding transaction
        with self.db.begin_nested():
            inserted = self.db.execute(stmt).scalars().all()
        return len(inserted)

    def count_active(self, profile_id: str) -> int:
        stmt = select(func.count(ProfileRecommendedSubsidy.id)).where(
            ProfileRecommendedSubsidy.profile_id == to_uuid(profile_id),
            ProfileRecommendedSubsidy.dismissed_at.is_(None),
        )
        with self.db.begin_nested():
            return self.db.execute(stmt).scalar_one()

    def delete_expired(self, today: date) -> int:
        expired = select(Subsidy.id).where(
            or_(Subsidy.is_active.is_(False), Subsidy.deadline < today)
        )
        stmt = (
            delete(ProfileRecommendedSubsidy)
            .where(ProfileRecommendedSubsidy.subsidy_id.in_(expired))
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        logger.info(f"Deleted {result.rowcount} recommendations for expired or inactive subsidies")
        return result.rowcount

    def list_for_profile(self, profile_id: str, include_dismissed: bool = False) -> List[StoredRecommendation]:
        pid = to_uuid(profile_id)
        if pid is None:
            return []

        stmt = (
            select(ProfileRecommendedSubsidy, Subsidy)
            .join(Subsidy, Subsidy.id == ProfileRecommendedSubsidy.subsidy_id)
            .where(ProfileRecommendedSubsidy.profile_id == pid)
        )
        if not include_dismissed:
            stmt = stmt.where(ProfileRecommendedSubsidy.dismissed_at.is_(None))
        stmt = stmt.order_by(ProfileRecommendedSubsidy.match_score.desc(), Subsidy.id)

        results = []
        for rec, subsidy in self.db.execute(stmt).all():
            results.append(StoredRecommendation(
                profile_id=str(rec.profile_id),
                subsidy_id=str(rec.subsidy_id),
                match_score=rec.match_score,
                match_reasons=list(rec.match_reasons or []),
                first_matched_at=as_utc(rec.first_matched_at),
                dismissed_at=as_utc(rec.dismissed_at),
                title=get_title(subsidy) or None,
                agency=subsidy.agency,
                deadline=subsidy.deadline,
                amount_max=float(subsidy.amount_max) if subsidy.amount_max is not None else None,
            ))
        return results

    def dismiss(self, profile_id: str, subsidy_id: str, dismissed_at: datetime) -> bool:
        pid, sid = to_uuid(profile_id), to_uuid(subsidy_id)
        if pid is None or sid is None:
            return False

        stmt = (
            update(ProfileRecommendedSubsidy)
            .where(
                ProfileRecommendedSubsidy.profile_id == pid,
                ProfileRecommendedSubsidy.subsidy_id == sid,
            )
            .values(dismissed_at=dismissed_at)
        )
        return self.db.execute(stmt).rowcount > 0
