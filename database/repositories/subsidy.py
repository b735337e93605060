import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import select, or_

from core.interfaces import CandidateRepository
from core.scorer.models import SubsidyCandidate
from database.models import Subsidy
from database.repositories.base import BaseRepository, as_utc

logger = logging.getLogger(__name__)


def _to_float(value):
    if value is None:
        return None
    return float(value)


def subsidy_to_candidate(row: Subsidy) -> SubsidyCandidate:
    return SubsidyCandidate(
        id=str(row.id),
        title=row.title,
        description=row.description,
        eligibility_criteria=row.eligibility_criteria,
        agency=row.agency,
        primary_sector=row.primary_sector,
        is_universal_sector=bool(row.is_universal_sector),
        region=row.region,
        amount_min=_to_float(row.amount_min),
        amount_max=_to_float(row.amount_max),
        legal_entities=row.legal_entities,
        deadline=row.deadline,
        keywords=row.keywords,
        created_at=as_utc(row.created_at),
    )


class SubsidyRepository(BaseRepository, CandidateRepository):
    def fetch_candidates(self, today: date, since: Optional[datetime] = None) -> List[SubsidyCandidate]:
        stmt = select(Subsidy).where(
            Subsidy.is_active.is_(True),
            Subsidy.is_business_relevant.is_(True),
            or_(Subsidy.deadline.is_(None), Subsidy.deadline >= today),
        )
        if since is not None:
            stmt = stmt.where(Subsidy.created_at >= since)

        rows = self.db.execute(stmt.order_by(Subsidy.id)).scalars().all()
        return [subsidy_to_candidate(row) for row in rows]
