"""
Profile analysis: turns a company profile into matching features.
"""

from core.analyzer.models import (
    AnalyzedProfile,
    EnrichmentDimension,
    ProfileInput,
    WebsiteIntelligence,
)
from core.analyzer.profile_analyzer import (
    analyze_profile,
    extract_search_terms,
    extract_thematic_keywords,
    get_company_size_category,
    get_entity_types,
    get_sector_from_naf_code,
)

__all__ = [
    'AnalyzedProfile',
    'EnrichmentDimension',
    'ProfileInput',
    'WebsiteIntelligence',
    'analyze_profile',
    'extract_search_terms',
    'extract_thematic_keywords',
    'get_company_size_category',
    'get_entity_types',
    'get_sector_from_naf_code',
]
