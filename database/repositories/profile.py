import logging
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select, update, nulls_first

from core.analyzer.models import ProfileInput
from core.interfaces import ProfileStore
from database.models import CompanyProfile
from database.repositories.base import BaseRepository, to_uuid, as_utc

logger = logging.getLogger(__name__)


def profile_to_input(row: CompanyProfile) -> ProfileInput:
    return ProfileInput.from_dict({
        'id': str(row.id),
        'company_name': row.company_name,
        'naf_code': row.naf_code,
        'naf_label': row.naf_label,
        'sector': row.sector,
        'sub_sector': row.sub_sector,
        'region': row.region,
        'department': row.department,
        'employees': row.employees,
        'annual_turnover': float(row.annual_turnover) if row.annual_turnover is not None else None,
        'legal_form': row.legal_form,
        'company_category': row.company_category,
        'year_created': row.year_created,
        'description': row.description,
        'certifications': row.certifications,
        'project_types': row.project_types,
        'website_intelligence': row.website_intelligence,
        'last_subsidy_refresh_at': as_utc(row.last_subsidy_refresh_at),
    })


class ProfileRepository(BaseRepository, ProfileStore):
    def get_by_id(self, profile_id: Any) -> Optional[CompanyProfile]:
        pid = to_uuid(profile_id)
        if pid is None:
            return None
        stmt = select(CompanyProfile).where(CompanyProfile.id == pid)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_profile(self, profile_id: str) -> Optional[ProfileInput]:
        row = self.get_by_id(profile_id)
        return profile_to_input(row) if row is not None else None

    def stamp_refresh(self, profile_id: str, refreshed_at: datetime) -> None:
        stmt = (
            update(CompanyProfile)
            .where(CompanyProfile.id == to_uuid(profile_id))
            .values(last_subsidy_refresh_at=refreshed_at)
        )
        with self.db.begin_nested():
            self.db.execute(stmt)

    def update_recommendation_count(self, profile_id: str, count: int) -> None:
        stmt = (
            update(CompanyProfile)
            .where(CompanyProfile.id == to_uuid(profile_id))
            .values(recommendation_count=count)
        )
        with self.db.begin_nested():
            self.db.execute(stmt)

    def find_stale_profiles(self, cutoff: datetime) -> List[ProfileInput]:
        stmt = (
            select(CompanyProfile)
            .where(
                (CompanyProfile.last_subsidy_refresh_at.is_(None))
                | (CompanyProfile.last_subsidy_refresh_at < cutoff)
            )
            .order_by(nulls_first(CompanyProfile.last_subsidy_refresh_at.asc()), CompanyProfile.id)
        )
        rows = self.db.execute(stmt).scalars().all()
        logger.debug(f"Found {len(rows)} stale profiles (cutoff {cutoff.isoformat()})")
        return [profile_to_input(row) for row in rows]
