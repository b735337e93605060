#!/usr/bin/env python3
"""
Scoring Module - rule-based subsidy scoring.

Public API:
- ScoringEngine: scores and ranks candidates for an analyzed profile
- SubsidyCandidate, ScoredCandidate, MatchRecord: data structures

Modules:
- models.py: Data structures
- text.py: Localized text accessors
- factors.py: The five scoring factors
- eligibility.py: Hard filters (sector exclusion, legal entity)
- persistence.py: Chunked writes to the recommendation store
- service.py: ScoringEngine
"""

from core.scorer.models import MatchRecord, ScoredCandidate, SubsidyCandidate
from core.scorer.service import ScoringEngine

__all__ = ['ScoringEngine', 'SubsidyCandidate', 'ScoredCandidate', 'MatchRecord']
