#!/usr/bin/env python3
"""
Scoring Factors - the five independent contributions to a match score.

Each factor returns (points, reason). reason is None when no points were
awarded. Factors never look at each other; ScoringEngine sums them.

- region: exact region, national program or unspecified region
- sector: primary sector overlap, universal or unspecified sector
- search terms: profile search terms found in the candidate text
- thematic: curated keywords found in the candidate text
- amount: bonus tiers on the maximum funding amount
"""

from typing import List, Optional, Sequence, Tuple

from core.config_loader import (
    AmountTier,
    RegionWeights,
    SearchTermWeights,
    SectorWeights,
    ThematicWeights,
)
from core.analyzer.models import AnalyzedProfile
from core.scorer.models import SubsidyCandidate

FactorResult = Tuple[int, Optional[str]]


def region_factor(
    profile: AnalyzedProfile,
    candidate: SubsidyCandidate,
    weights: RegionWeights,
) -> FactorResult:
    regions = [r for r in (candidate.region or []) if r]
    if not regions:
        return weights.universal, "Région non spécifiée"

    lowered = [r.lower() for r in regions]
    if profile.region and profile.region.lower() in lowered:
        return weights.exact, f"Région: {profile.region}"

    if weights.national_marker.lower() in lowered:
        return weights.national, "Programme national"

    return 0, None


def sector_factor(
    profile: AnalyzedProfile,
    candidate: SubsidyCandidate,
    weights: SectorWeights,
) -> FactorResult:
    if candidate.primary_sector and profile.sector:
        candidate_sector = candidate.primary_sector.lower()
        profile_sector = profile.sector.lower()
        if candidate_sector in profile_sector or profile_sector in candidate_sector:
            return weights.match, f"Secteur: {candidate.primary_sector}"

    if candidate.is_universal_sector:
        return weights.universal, "Secteur universel"

    if not candidate.primary_sector:
        return weights.unspecified, "Secteur non spécifié"

    return 0, None


def matched_terms(terms: Sequence[str], text: str) -> List[str]:
    """Terms (lowercased) that occur as substrings of text."""
    return [t for t in terms if t and t.lower() in text]


def search_term_factor(
    profile: AnalyzedProfile,
    text: str,
    weights: SearchTermWeights,
) -> FactorResult:
    matches = matched_terms(profile.search_terms, text)
    count = len(matches)
    if count == 0:
        return 0, None

    shown = ', '.join(matches[:weights.reason_terms])
    if count >= weights.high_threshold:
        return weights.high, f"Mots-clés: {shown}"
    if count >= weights.medium_threshold:
        return weights.medium, f"Mots-clés: {shown}"
    return weights.per_match * count, f"Texte: {shown}"


def thematic_factor(
    profile: AnalyzedProfile,
    text: str,
    weights: ThematicWeights,
) -> FactorResult:
    matches = matched_terms(profile.thematic_keywords, text)
    if not matches:
        return 0, None

    points = min(weights.cap, weights.per_match * len(matches))
    return points, f"Thématique: {', '.join(matches[:weights.reason_terms])}"


def amount_factor(candidate: SubsidyCandidate, tiers: Sequence[AmountTier]) -> FactorResult:
    if candidate.amount_max is None:
        return 0, None

    amount = float(candidate.amount_max)
    for tier in sorted(tiers, key=lambda t: t.min_amount, reverse=True):
        if amount >= tier.min_amount:
            return tier.bonus, f"Montant jusqu'à {int(amount):,} €".replace(',', ' ')
    return 0, None
