#!/usr/bin/env python3
"""
Profile Analyzer - derive matching features from a company profile.

Turns a ProfileInput into an AnalyzedProfile:
- search terms (free-text tokens matched against subsidy text)
- thematic keywords (curated vocabulary matched against subsidy text)
- sector, size category and eligible entity types

Pure functions only: no I/O, no randomness, missing optional fields are skipped.
"""

import logging
import re
from typing import Iterable, List, Optional

from core.config_loader import AnalyzerConfig
from core.analyzer.models import AnalyzedProfile, ProfileInput
from core.analyzer import vocabulary

logger = logging.getLogger(__name__)

_NAF_SPLIT = re.compile(r'[\s,;]+')
_DESCRIPTION_SPLIT = re.compile(r'[\s,;.!?]+')
_ENRICHMENT_SPLIT = re.compile(r'[\s,;.]+')
_LEADING_INT = re.compile(r'^\s*(\d+)')

_LEGAL_FORMS = sorted(
    vocabulary.LEGAL_FORM_TO_ENTITY.items(), key=lambda item: len(item[0]), reverse=True
)


def _dedupe(items: Iterable[str]) -> List[str]:
    """Remove duplicates, keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _tokens(text: str, pattern: re.Pattern, min_length: int) -> List[str]:
    return [
        w for w in pattern.split(text.lower())
        if len(w) > min_length and w not in vocabulary.STOP_WORDS
    ]


def get_sector_from_naf_code(naf_code: Optional[str]) -> Optional[str]:
    """Map a NAF code such as '62.01Z' to a sector label using its two-digit prefix."""
    if not naf_code:
        return None
    return vocabulary.NAF_SECTOR_MAP.get(naf_code.strip()[:2])


def get_company_size_category(employees: Optional[str]) -> str:
    """
    Size category from an employee band string.

    Only the leading integer is read, so '10-49' counts as 10.
    Missing or unparseable values count as zero employees.
    """
    count = 0
    if employees:
        match = _LEADING_INT.match(str(employees))
        if match:
            count = int(match.group(1))

    if count < 10:
        return 'TPE'
    if count < 250:
        return 'PME'
    if count < 5000:
        return 'ETI'
    return 'GE'


def get_entity_types(legal_form: Optional[str]) -> List[str]:
    """Entity types a legal form qualifies as, for eligibility lists."""
    if not legal_form:
        return list(vocabulary.DEFAULT_ENTITY_TYPES)

    upper = legal_form.upper()
    # SASU must not resolve to SA, SARLU to SARL
    for form, types in _LEGAL_FORMS:
        if form.upper() in upper:
            return list(types)
    return list(vocabulary.FALLBACK_ENTITY_TYPES)


def extract_search_terms(profile: ProfileInput, config: Optional[AnalyzerConfig] = None) -> List[str]:
    """
    Collect lowercase search terms from the profile.

    Sources, in order: NAF label, sector, sub-sector, project types,
    certifications, description, enrichment business activities, enrichment
    company description, innovation indicators, sustainability initiatives,
    export markets and growth signals.
    """
    config = config or AnalyzerConfig()
    terms: List[str] = []

    if profile.naf_label:
        terms.extend(_tokens(profile.naf_label, _NAF_SPLIT, 3))

    if profile.sector:
        terms.append(profile.sector.lower())
    if profile.sub_sector:
        terms.append(profile.sub_sector.lower())

    terms.extend(p.lower() for p in profile.project_types)

    for cert in profile.certifications:
        cert_lower = cert.lower()
        terms.append(cert_lower)
        for marker, expansions in vocabulary.CERTIFICATION_TERM_EXPANSIONS:
            if marker in cert_lower:
                terms.extend(expansions)

    if profile.description:
        words = [
            w for w in _tokens(profile.description, _DESCRIPTION_SPLIT, 4)
            if w not in vocabulary.GENERIC_DESCRIPTION_WORDS
        ]
        terms.extend(words[:config.max_description_terms])

    wi = profile.website_intelligence
    if wi:
        for activity in wi.business_activities:
            activity_lower = activity.lower()
            terms.append(activity_lower)
            terms.extend(w for w in activity_lower.split() if len(w) > 3)

        if wi.company_description:
            words = _tokens(wi.company_description, _ENRICHMENT_SPLIT, 4)
            terms.extend(words[:config.max_enrichment_description_terms])

        for dimension in (wi.innovations, wi.sustainability, wi.export, wi.growth):
            terms.extend(i.lower() for i in dimension.indicators)

    return _dedupe(terms)[:config.max_search_terms]


def extract_thematic_keywords(profile: ProfileInput, sector: Optional[str] = None) -> List[str]:
    """Curated keywords implied by the profile's sector, labels and enrichment data."""
    keywords: List[str] = []

    sector = sector or profile.sector or get_sector_from_naf_code(profile.naf_code)
    if sector:
        keywords.extend(vocabulary.SECTOR_INDICATOR_KEYWORDS.get(sector, []))

    for cert in profile.certifications:
        cert_lower = cert.lower()
        for markers, themes in vocabulary.CERTIFICATION_THEMES:
            if any(m in cert_lower for m in markers):
                keywords.extend(themes)

    if profile.description:
        desc = profile.description.lower()
        for markers, themes in vocabulary.DESCRIPTION_THEMES:
            if any(m in desc for m in markers):
                keywords.extend(themes)

    wi = profile.website_intelligence
    if wi:
        for dimension_name, threshold, themes in vocabulary.ENRICHMENT_SCORE_THEMES:
            score = getattr(wi, dimension_name).score
            if score is not None and score >= threshold:
                keywords.extend(themes)

        for activity in wi.business_activities:
            activity_lower = activity.lower()
            for markers, themes in vocabulary.BUSINESS_ACTIVITY_THEMES:
                if any(m in activity_lower for m in markers):
                    keywords.extend(themes)

        for initiative in wi.sustainability.indicators:
            initiative_lower = initiative.lower()
            for markers, themes in vocabulary.SUSTAINABILITY_INITIATIVE_THEMES:
                if any(m in initiative_lower for m in markers):
                    keywords.extend(themes)

    for project_type in profile.project_types:
        lower = project_type.lower()
        for markers, themes in vocabulary.PROJECT_TYPE_THEMES:
            if any(m in lower for m in markers):
                keywords.extend(themes)

    return _dedupe(keywords)


def analyze_profile(
    profile: ProfileInput,
    config: Optional[AnalyzerConfig] = None,
) -> AnalyzedProfile:
    """Build the AnalyzedProfile used by the scoring engine."""
    sector = profile.sector or get_sector_from_naf_code(profile.naf_code)

    analyzed = AnalyzedProfile(
        sector=sector,
        region=profile.region,
        size_category=get_company_size_category(profile.employees),
        search_terms=tuple(extract_search_terms(profile, config)),
        thematic_keywords=tuple(extract_thematic_keywords(profile, sector)),
        exclusion_keywords=tuple(vocabulary.SECTOR_EXCLUSIONS.get(sector, [])) if sector else (),
        entity_type=profile.legal_form,
        certifications=tuple(profile.certifications),
        project_types=tuple(profile.project_types),
    )

    logger.debug(
        f"Analyzed profile {profile.id}: sector={analyzed.sector}, size={analyzed.size_category}, "
        f"{len(analyzed.search_terms)} search terms, {len(analyzed.thematic_keywords)} thematic keywords"
    )
    return analyzed
