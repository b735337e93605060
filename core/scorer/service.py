#!/usr/bin/env python3
"""
Scoring Engine - rule-based match scoring of subsidies against a profile.

score() sums five independent factors (region, sector, search terms,
thematic keywords, amount) and clamps the total to [0, 100].
rank_candidates() applies the eligibility gate, the minimum score and the
result cap on top of score().

Stateless apart from its configuration, so one engine may be shared by
concurrent refresh runs.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from core.config_loader import ScorerConfig
from core.analyzer.models import AnalyzedProfile
from core.scorer import factors
from core.scorer.eligibility import check_eligibility
from core.scorer.models import ScoredCandidate, SubsidyCandidate
from core.scorer.text import candidate_text

logger = logging.getLogger(__name__)

MAX_SCORE = 100


class ScoringEngine:
    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()

    def score(self, profile: AnalyzedProfile, candidate: SubsidyCandidate) -> Tuple[int, List[str]]:
        """
        Score one candidate.

        Returns: (score in [0, 100], reasons in factor order)
        """
        text = candidate_text(candidate, include_eligibility=self.config.include_eligibility_text)

        results = [
            factors.region_factor(profile, candidate, self.config.region),
            factors.sector_factor(profile, candidate, self.config.sector),
            factors.search_term_factor(profile, text, self.config.search_terms),
            factors.thematic_factor(profile, text, self.config.thematic),
            factors.amount_factor(candidate, self.config.amount_tiers),
        ]

        total = sum(points for points, _ in results)
        reasons = [reason for _, reason in results if reason]
        return max(0, min(MAX_SCORE, int(total))), reasons

    def evaluate(self, profile: AnalyzedProfile, candidate: SubsidyCandidate) -> ScoredCandidate:
        """Eligibility gate followed by score()."""
        if self.config.hard_filters_enabled:
            eligible, filter_reason = check_eligibility(profile, candidate)
            if not eligible:
                return ScoredCandidate(candidate=candidate, filtered=True, filter_reason=filter_reason)

        score, reasons = self.score(profile, candidate)
        return ScoredCandidate(candidate=candidate, score=score, reasons=reasons)

    def rank_candidates(
        self,
        profile: AnalyzedProfile,
        candidates: Iterable[SubsidyCandidate],
        min_score: int = 0,
        max_results: Optional[int] = None,
    ) -> List[ScoredCandidate]:
        """
        Score all candidates and keep the best ones.

        Filtered and below-threshold candidates are dropped. Results are sorted
        by score descending, then candidate id, and truncated to max_results.
        """
        kept = []
        filtered = 0
        below = 0
        for candidate in candidates:
            scored = self.evaluate(profile, candidate)
            if scored.filtered:
                filtered += 1
                continue
            if scored.score < min_score:
                below += 1
                continue
            kept.append(scored)

        kept.sort(key=lambda s: (-s.score, s.candidate.id))
        if max_results is not None:
            kept = kept[:max_results]

        logger.info(
            f"Ranked candidates: {len(kept)} kept, {filtered} hard-filtered, "
            f"{below} below threshold ({min_score})"
        )
        return kept
