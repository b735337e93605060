#!/usr/bin/env python3
"""
Scoring Models - Data structures for candidates and scoring results.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

# Subsidy text fields are either plain strings or {"fr": ..., "en": ...} mappings
LocalizedText = Union[str, Dict[str, Any], None]


@dataclass
class SubsidyCandidate:
    """Read-only projection of a subsidy with every field the scorer reads."""
    id: str
    title: LocalizedText = None
    description: LocalizedText = None
    eligibility_criteria: LocalizedText = None
    agency: Optional[str] = None
    primary_sector: Optional[str] = None
    is_universal_sector: bool = False
    region: Optional[List[str]] = None
    amount_min: Optional[float] = None
    amount_max: Optional[float] = None
    legal_entities: Optional[List[str]] = None
    deadline: Optional[date] = None
    keywords: Optional[List[str]] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubsidyCandidate":
        return cls(
            id=str(data['id']),
            title=data.get('title'),
            description=data.get('description'),
            eligibility_criteria=data.get('eligibility_criteria'),
            agency=data.get('agency'),
            primary_sector=data.get('primary_sector'),
            is_universal_sector=bool(data.get('is_universal_sector')),
            region=data.get('region'),
            amount_min=data.get('amount_min'),
            amount_max=data.get('amount_max'),
            legal_entities=data.get('legal_entities'),
            deadline=data.get('deadline'),
            keywords=data.get('keywords'),
            created_at=data.get('created_at'),
        )


@dataclass
class ScoredCandidate:
    """A candidate together with its score, reasons and hard-filter outcome."""
    candidate: SubsidyCandidate
    score: int = 0
    reasons: List[str] = field(default_factory=list)
    filtered: bool = False
    filter_reason: Optional[str] = None


@dataclass
class MatchRecord:
    """Row to insert into the recommendation store."""
    profile_id: str
    subsidy_id: str
    match_score: int
    match_reasons: List[str] = field(default_factory=list)


@dataclass
class StoredRecommendation:
    """A persisted recommendation joined with its subsidy title."""
    profile_id: str
    subsidy_id: str
    match_score: int
    match_reasons: List[str] = field(default_factory=list)
    first_matched_at: Optional[datetime] = None
    dismissed_at: Optional[datetime] = None
    title: Optional[str] = None
    agency: Optional[str] = None
    deadline: Optional[date] = None
    amount_max: Optional[float] = None
