import uuid

from sqlalchemy import Column, Integer, Text, DateTime, Numeric, Uuid, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class CompanyProfile(Base):
    """
    Company profile matched against the subsidy catalog.

    last_subsidy_refresh_at is stamped by every recommendation refresh and
    drives both incremental refreshes and stale-profile selection.
    """
    __tablename__ = 'company_profile'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_name = Column(Text)

    # Activity
    naf_code = Column(Text)
    naf_label = Column(Text)
    sector = Column(Text)
    sub_sector = Column(Text)

    # Location
    region = Column(Text)
    department = Column(Text)

    # Size and legal identity
    employees = Column(Text)  # employee band, e.g. "10-49"
    annual_turnover = Column(Numeric(16, 2))
    legal_form = Column(Text)
    company_category = Column(Text)
    year_created = Column(Integer)

    description = Column(Text)
    certifications = Column(JSONType, default=list)
    project_types = Column(JSONType, default=list)
    website_intelligence = Column(JSONType, nullable=True)

    last_subsidy_refresh_at = Column(DateTime(timezone=True), nullable=True)
    recommendation_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    recommendations = relationship(
        "ProfileRecommendedSubsidy", back_populates="profile", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_company_profile_last_refresh', 'last_subsidy_refresh_at'),
    )
