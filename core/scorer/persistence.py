#!/usr/bin/env python3
"""
Persistence Operations - chunked writes of scored matches.

Records are written to the RecommendationStore in fixed-size batches.
Each batch is inserted with conflict-ignore semantics, so re-running a
refresh never overwrites an existing recommendation. A failing batch is
logged and skipped; the remaining batches are still written.
"""

import logging
from typing import Iterator, List, Sequence

from core.interfaces import RecommendationStore
from core.scorer.models import MatchRecord, ScoredCandidate

logger = logging.getLogger(__name__)


def to_match_records(profile_id: str, scored: Sequence[ScoredCandidate]) -> List[MatchRecord]:
    return [
        MatchRecord(
            profile_id=profile_id,
            subsidy_id=s.candidate.id,
            match_score=max(0, min(100, int(s.score))),
            match_reasons=list(s.reasons),
        )
        for s in scored
    ]


def chunked(records: Sequence[MatchRecord], size: int) -> Iterator[Sequence[MatchRecord]]:
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(records), size):
        yield records[start:start + size]


def persist_matches(store: RecommendationStore, records: Sequence[MatchRecord], batch_size: int = 50) -> int:
    """
    Insert records batch by batch.

    Returns: number of rows actually inserted (existing pairs are not counted)
    """
    inserted = 0
    for index, batch in enumerate(chunked(records, batch_size)):
        try:
            inserted += store.insert_batch(batch)
        except Exception as e:
            logger.error(f"Failed to insert recommendation batch {index} ({len(batch)} records): {e}")
    logger.info(f"Persisted {inserted} new recommendations out of {len(records)} records")
    return inserted
