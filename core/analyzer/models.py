"""
Profile data structures used by the analyzer.

ProfileInput is a plain snapshot of a company profile, detached from any
database session. AnalyzedProfile is the derived view consumed by scoring.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


def _str_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value if v]


@dataclass
class EnrichmentDimension:
    """One scored sub-dimension of the website enrichment bundle."""
    score: Optional[float] = None
    indicators: List[str] = field(default_factory=list)


@dataclass
class WebsiteIntelligence:
    """AI enrichment bundle gathered from the company's website."""
    company_description: Optional[str] = None
    business_activities: List[str] = field(default_factory=list)
    innovations: EnrichmentDimension = field(default_factory=EnrichmentDimension)
    sustainability: EnrichmentDimension = field(default_factory=EnrichmentDimension)
    export: EnrichmentDimension = field(default_factory=EnrichmentDimension)
    digital: EnrichmentDimension = field(default_factory=EnrichmentDimension)
    growth: EnrichmentDimension = field(default_factory=EnrichmentDimension)

    # Indicator list key per dimension in the stored JSON
    _INDICATOR_KEYS = {
        'innovations': 'indicators',
        'sustainability': 'initiatives',
        'export': 'markets',
        'digital': 'technologies',
        'growth': 'signals',
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["WebsiteIntelligence"]:
        """Build from the stored JSON bundle (camelCase keys, snake_case accepted)."""
        if not data:
            return None

        def dimension(name: str) -> EnrichmentDimension:
            raw = data.get(name) or {}
            indicator_key = cls._INDICATOR_KEYS[name]
            return EnrichmentDimension(
                score=raw.get('score'),
                indicators=_str_list(raw.get(indicator_key)),
            )

        return cls(
            company_description=data.get('companyDescription') or data.get('company_description'),
            business_activities=_str_list(
                data.get('businessActivities') or data.get('business_activities')
            ),
            innovations=dimension('innovations'),
            sustainability=dimension('sustainability'),
            export=dimension('export'),
            digital=dimension('digital'),
            growth=dimension('growth'),
        )


@dataclass
class ProfileInput:
    """Snapshot of a company profile as read from the profile store."""
    id: str
    company_name: Optional[str] = None
    naf_code: Optional[str] = None
    naf_label: Optional[str] = None
    sector: Optional[str] = None
    sub_sector: Optional[str] = None
    region: Optional[str] = None
    department: Optional[str] = None
    employees: Optional[str] = None
    annual_turnover: Optional[float] = None
    legal_form: Optional[str] = None
    company_category: Optional[str] = None
    year_created: Optional[int] = None
    description: Optional[str] = None
    certifications: List[str] = field(default_factory=list)
    project_types: List[str] = field(default_factory=list)
    website_intelligence: Optional[WebsiteIntelligence] = None
    last_subsidy_refresh_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileInput":
        employees = data.get('employees')
        return cls(
            id=str(data['id']),
            company_name=data.get('company_name'),
            naf_code=data.get('naf_code'),
            naf_label=data.get('naf_label'),
            sector=data.get('sector'),
            sub_sector=data.get('sub_sector'),
            region=data.get('region'),
            department=data.get('department'),
            employees=str(employees) if employees is not None else None,
            annual_turnover=data.get('annual_turnover'),
            legal_form=data.get('legal_form'),
            company_category=data.get('company_category'),
            year_created=data.get('year_created'),
            description=data.get('description'),
            certifications=_str_list(data.get('certifications')),
            project_types=_str_list(data.get('project_types')),
            website_intelligence=WebsiteIntelligence.from_dict(data.get('website_intelligence')),
            last_subsidy_refresh_at=data.get('last_subsidy_refresh_at'),
        )


@dataclass(frozen=True)
class AnalyzedProfile:
    """Matching-relevant view of a profile. Computed per scoring pass, never stored."""
    sector: Optional[str]
    region: Optional[str]
    size_category: str
    search_terms: Tuple[str, ...] = ()
    thematic_keywords: Tuple[str, ...] = ()
    exclusion_keywords: Tuple[str, ...] = ()
    entity_type: Optional[str] = None
    certifications: Tuple[str, ...] = ()
    project_types: Tuple[str, ...] = ()
