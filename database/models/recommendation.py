import uuid

from sqlalchemy import (
    Column, Integer, DateTime, ForeignKey, Uuid, UniqueConstraint, CheckConstraint, Index, func
)
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class ProfileRecommendedSubsidy(Base):
    """
    Persisted match between a company profile and a subsidy.

    Rows are only ever inserted with conflict-ignore semantics, so
    first_matched_at and match_score keep the values of the first match.
    dismissed_at is set by the user-facing dismiss action only.
    """
    __tablename__ = 'profile_recommended_subsidy'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id = Column(Uuid(as_uuid=True), ForeignKey('company_profile.id', ondelete='CASCADE'), nullable=False)
    subsidy_id = Column(Uuid(as_uuid=True), ForeignKey('subsidy.id', ondelete='CASCADE'), nullable=False)

    match_score = Column(Integer, nullable=False)
    match_reasons = Column(JSONType, default=list)

    first_matched_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    dismissed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    profile = relationship("CompanyProfile", back_populates="recommendations")
    subsidy = relationship("Subsidy")

    __table_args__ = (
        UniqueConstraint('profile_id', 'subsidy_id', name='uq_profile_recommended_subsidy'),
        CheckConstraint('match_score >= 0 AND match_score <= 100', name='ck_match_score_range'),
        Index('idx_prs_profile_score', 'profile_id', 'match_score'),
    )
