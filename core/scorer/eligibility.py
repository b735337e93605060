"""
Eligibility gate - hard filters applied before a candidate is ranked.

A candidate is filtered out when:
- a sector exclusion word appears in its title, not preceded by an
  exclusion phrase such as "sauf" or "hors"
- it lists legal entities and none is compatible with the profile
"""

from typing import Optional, Sequence, Tuple

from core.analyzer.models import AnalyzedProfile
from core.analyzer.profile_analyzer import get_entity_types
from core.analyzer.vocabulary import EXCLUSION_CONTEXT_PATTERNS
from core.scorer.models import SubsidyCandidate
from core.scorer.text import get_title

_CONTEXT_WINDOW = 50
_GENERIC_ENTITIES = frozenset(['entreprise', 'société', 'tous', 'toutes entreprises'])


def has_exclusion_context(text: str, term: str) -> bool:
    """True when an exclusion phrase occurs shortly before the first occurrence of term."""
    index = text.find(term)
    if index == -1:
        return False
    before = text[max(0, index - _CONTEXT_WINDOW):index]
    return any(p in before for p in EXCLUSION_CONTEXT_PATTERNS)


def check_sector_exclusion(profile: AnalyzedProfile, candidate: SubsidyCandidate) -> Optional[str]:
    title = get_title(candidate).lower()
    for exclusion in profile.exclusion_keywords:
        if exclusion in title and not has_exclusion_context(title, exclusion):
            return f'Secteur exclu: "{exclusion}" dans le titre'
    return None


def check_entity_compatibility(
    legal_entities: Optional[Sequence[str]],
    profile: AnalyzedProfile,
) -> Optional[str]:
    if not legal_entities:
        return None

    size = profile.size_category.lower()
    entity_types = [t.lower() for t in get_entity_types(profile.entity_type)]

    for entity in legal_entities:
        entity_lower = entity.lower()
        if size in entity_lower:
            return None
        if entity_lower in _GENERIC_ENTITIES:
            return None
        for entity_type in entity_types:
            if entity_type in entity_lower or entity_lower in entity_type:
                return None

    return f"Entités requises: {', '.join(legal_entities)} - Profil: {profile.size_category}"


def check_eligibility(profile: AnalyzedProfile, candidate: SubsidyCandidate) -> Tuple[bool, Optional[str]]:
    """Returns (eligible, filter_reason)."""
    reason = check_sector_exclusion(profile, candidate)
    if reason is None:
        reason = check_entity_compatibility(candidate.legal_entities, profile)
    return reason is None, reason
