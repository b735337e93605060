import uuid

from sqlalchemy import Column, Text, DateTime, Date, Boolean, Numeric, Uuid, Index, func

from .base import Base, JSONType


class Subsidy(Base):
    """
    Public funding program.

    title, description and eligibility_criteria hold either a plain string or
    a {"fr": ..., "en": ...} mapping. An empty or null region list means the
    program is open to every region; a null deadline means it never expires.
    """
    __tablename__ = 'subsidy'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    title = Column(JSONType, nullable=False)
    description = Column(JSONType)
    eligibility_criteria = Column(JSONType)
    agency = Column(Text)

    primary_sector = Column(Text)
    is_universal_sector = Column(Boolean, nullable=False, default=False)
    region = Column(JSONType)
    legal_entities = Column(JSONType)
    keywords = Column(JSONType)

    amount_min = Column(Numeric(16, 2))
    amount_max = Column(Numeric(16, 2))
    deadline = Column(Date, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    is_business_relevant = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_subsidy_active_deadline', 'is_active', 'deadline'),
        Index('idx_subsidy_created_at', 'created_at'),
    )
