#!/usr/bin/env python3
"""
Unit tests for chunked match persistence.
"""

import unittest
from unittest.mock import MagicMock

from core.scorer.models import MatchRecord, ScoredCandidate, SubsidyCandidate
from core.scorer.persistence import chunked, persist_matches, to_match_records
from tests.mocks.store_mocks import InMemoryRecommendationStore


def make_records(count, profile_id='p1'):
    return [MatchRecord(profile_id=profile_id, subsidy_id=f's{i:03d}', match_score=50) for i in range(count)]


class TestPersistMatches(unittest.TestCase):

    def test_records_are_written_in_batches(self):
        store = InMemoryRecommendationStore()
        inserted = persist_matches(store, make_records(120), batch_size=50)
        self.assertEqual(inserted, 120)
        self.assertEqual(store.batch_sizes, [50, 50, 20])

    def test_existing_pairs_are_not_counted(self):
        store = InMemoryRecommendationStore()
        persist_matches(store, make_records(10), batch_size=50)
        self.assertEqual(persist_matches(store, make_records(12), batch_size=50), 2)

    def test_failing_batch_is_skipped(self):
        store = InMemoryRecommendationStore()
        store.fail_batches = {1}
        inserted = persist_matches(store, make_records(120), batch_size=50)
        self.assertEqual(inserted, 70)
        self.assertEqual(len(store.rows), 70)

    def test_empty_records(self):
        store = MagicMock()
        self.assertEqual(persist_matches(store, [], batch_size=50), 0)
        store.insert_batch.assert_not_called()

    def test_invalid_batch_size(self):
        with self.assertRaises(ValueError):
            list(chunked(make_records(3), 0))

    def test_to_match_records(self):
        scored = [ScoredCandidate(candidate=SubsidyCandidate(id='s1'), score=42, reasons=['Région: Bretagne'])]
        records = to_match_records('p1', scored)
        self.assertEqual(records, [MatchRecord('p1', 's1', 42, ['Région: Bretagne'])])


if __name__ == '__main__':
    unittest.main()
