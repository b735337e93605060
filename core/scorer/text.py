"""
Text accessors for subsidy candidates with localized fields.
"""

from core.scorer.models import LocalizedText, SubsidyCandidate


def _localized(value: LocalizedText, fallback_en: bool = False) -> str:
    if not value:
        return ''
    if isinstance(value, dict):
        text = value.get('fr')
        if not text and fallback_en:
            text = value.get('en')
        return text or ''
    return str(value)


def get_title(candidate: SubsidyCandidate) -> str:
    """French title, English when no French title exists."""
    return _localized(candidate.title, fallback_en=True)


def get_description(candidate: SubsidyCandidate) -> str:
    return _localized(candidate.description)


def get_eligibility(candidate: SubsidyCandidate) -> str:
    return _localized(candidate.eligibility_criteria)


def candidate_text(candidate: SubsidyCandidate, include_eligibility: bool = False) -> str:
    """Lowercase text searched for profile terms."""
    parts = [get_title(candidate), get_description(candidate)]
    if include_eligibility:
        parts.append(get_eligibility(candidate))
    return ' '.join(parts).lower()
