#!/usr/bin/env python3
"""
Unit tests for RefreshOrchestrator with in-memory stores.
"""

import itertools
import unittest
from datetime import date, datetime, timedelta, timezone

from core.analyzer.models import ProfileInput
from core.config_loader import MatchingConfig
from core.exceptions import CandidateFetchError, ProfileNotFoundError
from core.scorer.models import SubsidyCandidate
from pipeline import RefreshMode, RefreshOrchestrator
from tests.mocks.store_mocks import (
    FakeUnitOfWork,
    InMemoryCandidateRepository,
    InMemoryProfileStore,
    InMemoryRecommendationStore,
)

NOW = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)
PROFILE_ID = '3f2b6a1c-2c1d-4a8e-9b7f-0e5d2c4a1b9e'


def make_candidate(cid, created_days_ago=30, **overrides):
    data = dict(
        id=cid,
        title='Aide à la transformation numérique',
        description='Accompagnement des PME dans leur projet logiciel',
        region=['Bretagne'],
        primary_sector='Numérique',
        created_at=NOW - timedelta(days=created_days_ago),
    )
    data.update(overrides)
    return SubsidyCandidate(**data)


class OrchestratorTestCase(unittest.TestCase):

    def setUp(self):
        ticks = itertools.count()
        self.profile = ProfileInput(
            id=PROFILE_ID,
            sector='Numérique',
            region='Bretagne',
            employees='20',
            naf_label='Édition de logiciels applicatifs',
        )
        self.profiles = InMemoryProfileStore([self.profile])
        self.subsidies = InMemoryCandidateRepository()
        self.recommendations = InMemoryRecommendationStore(
            self.subsidies, now=lambda: NOW + timedelta(seconds=next(ticks))
        )
        self.uow = FakeUnitOfWork(self.profiles, self.subsidies, self.recommendations)
        self.orchestrator = RefreshOrchestrator(self.uow, MatchingConfig(), clock=lambda: NOW)


class TestFullRefresh(OrchestratorTestCase):

    def setUp(self):
        super().setUp()
        self.subsidies.add(make_candidate('s-good'))
        self.subsidies.add(make_candidate('s-national', region=['National'], primary_sector=None,
                                          title='Prêt croissance', description='Financement'))
        # Wrong region and sector, no text overlap: 0 points
        self.subsidies.add(make_candidate('s-weak', region=['Occitanie'], primary_sector='Agriculture',
                                          title='Irrigation', description='Matériel'))
        self.subsidies.add(make_candidate('s-expired', deadline=date(2026, 1, 1)))
        self.subsidies.add(make_candidate('s-inactive'), is_active=False)

    def test_full_run_persists_matches_above_threshold(self):
        result = self.orchestrator.recalculate(PROFILE_ID, RefreshMode.FULL)

        self.assertEqual(result.profile_id, PROFILE_ID)
        self.assertEqual(result.mode, RefreshMode.FULL)
        self.assertEqual(result.new_matches, 2)
        self.assertEqual(result.total_matches, 2)
        self.assertGreaterEqual(result.processing_time_ms, 0)
        self.assertEqual(set(k[1] for k in self.recommendations.rows), {'s-good', 's-national'})
        for row in self.recommendations.rows.values():
            self.assertGreaterEqual(row.match_score, 25)
            self.assertLessEqual(row.match_score, 100)
            self.assertTrue(row.match_reasons)

        self.assertEqual(self.profiles.stamp_calls, [(PROFILE_ID, NOW)])
        self.assertEqual(self.profiles.recommendation_counts[PROFILE_ID], 2)
        self.assertEqual(self.subsidies.fetch_calls, [(NOW.date(), None)])
        self.assertEqual(self.uow.commits, 1)

    def test_second_full_run_is_idempotent(self):
        self.orchestrator.recalculate(PROFILE_ID, 'full')
        first_seen = {k: r.first_matched_at for k, r in self.recommendations.rows.items()}

        second = self.orchestrator.recalculate(PROFILE_ID, 'full')

        self.assertEqual(second.new_matches, 0)
        self.assertEqual(second.total_matches, 2)
        self.assertEqual({k: r.first_matched_at for k, r in self.recommendations.rows.items()}, first_seen)

    def test_dismissed_matches_are_not_counted(self):
        self.orchestrator.recalculate(PROFILE_ID, 'full')
        self.recommendations.dismiss(PROFILE_ID, 's-good', NOW)

        result = self.orchestrator.recalculate(PROFILE_ID, 'full')

        self.assertEqual(result.total_matches, 1)
        self.assertEqual(result.new_matches, 0)

    def test_threshold_and_cap_come_from_config(self):
        config = MatchingConfig()
        config.refresh.max_results = 1
        orchestrator = RefreshOrchestrator(self.uow, config, clock=lambda: NOW)

        result = orchestrator.recalculate(PROFILE_ID, 'full')

        self.assertEqual(result.new_matches, 1)
        self.assertIn((PROFILE_ID, 's-good'), self.recommendations.rows)


class TestIncrementalRefresh(OrchestratorTestCase):

    def test_incremental_only_scores_new_candidates(self):
        last_refresh = NOW - timedelta(days=4)
        self.profile.last_subsidy_refresh_at = last_refresh
        self.subsidies.add(make_candidate('s-old', created_days_ago=10))
        self.subsidies.add(make_candidate('s-new', created_days_ago=1))

        result = self.orchestrator.recalculate(PROFILE_ID, RefreshMode.INCREMENTAL)

        self.assertEqual(self.subsidies.fetch_calls, [(NOW.date(), last_refresh)])
        self.assertEqual(result.new_matches, 1)
        self.assertEqual(list(self.recommendations.rows), [(PROFILE_ID, 's-new')])

    def test_incremental_without_previous_refresh_behaves_like_full(self):
        self.subsidies.add(make_candidate('s-old', created_days_ago=400))

        result = self.orchestrator.recalculate(PROFILE_ID, RefreshMode.INCREMENTAL)

        self.assertEqual(self.subsidies.fetch_calls, [(NOW.date(), None)])
        self.assertEqual(result.new_matches, 1)
        self.assertEqual(result.mode, RefreshMode.INCREMENTAL)

    def test_zero_candidates_still_stamps(self):
        self.profile.last_subsidy_refresh_at = NOW - timedelta(days=1)
        self.subsidies.add(make_candidate('s-old', created_days_ago=10))

        result = self.orchestrator.recalculate(PROFILE_ID, RefreshMode.INCREMENTAL)

        self.assertEqual((result.total_matches, result.new_matches), (0, 0))
        self.assertEqual(self.profiles.stamp_calls, [(PROFILE_ID, NOW)])
        self.assertEqual(self.recommendations.batch_sizes, [])


class TestRefreshErrors(OrchestratorTestCase):

    def test_missing_profile(self):
        with self.assertRaises(ProfileNotFoundError) as ctx:
            self.orchestrator.recalculate('00000000-0000-4000-8000-000000000000', 'full')
        self.assertIn('Profile not found', str(ctx.exception))
        self.assertEqual(self.uow.rollbacks, 1)
        self.assertEqual(self.profiles.stamp_calls, [])

    def test_profile_load_failure(self):
        self.profiles.fail_get = RuntimeError('connection reset')
        with self.assertRaises(ProfileNotFoundError) as ctx:
            self.orchestrator.recalculate(PROFILE_ID, 'full')
        self.assertEqual(str(ctx.exception), 'Profile not found: connection reset')

    def test_candidate_fetch_failure(self):
        self.subsidies.fail_fetch = RuntimeError('statement timeout')
        with self.assertRaises(CandidateFetchError) as ctx:
            self.orchestrator.recalculate(PROFILE_ID, 'full')
        self.assertEqual(str(ctx.exception), 'Failed to fetch subsidies: statement timeout')
        self.assertEqual(self.profiles.stamp_calls, [])

    def test_stamp_failure_is_logged_not_raised(self):
        self.subsidies.add(make_candidate('s-good'))
        self.profiles.fail_stamp = RuntimeError('lock timeout')

        with self.assertLogs('pipeline.orchestrator', level='ERROR') as logs:
            result = self.orchestrator.recalculate(PROFILE_ID, 'full')

        self.assertEqual(result.new_matches, 1)
        self.assertTrue(any('lock timeout' in line for line in logs.output))

    def test_count_failure_falls_back_to_new_matches(self):
        self.subsidies.add(make_candidate('s-good'))
        self.subsidies.add(make_candidate('s-other'))
        self.recommendations.fail_count = RuntimeError('count query failed')

        with self.assertLogs('pipeline.orchestrator', level='ERROR') as logs:
            result = self.orchestrator.recalculate(PROFILE_ID, 'full')

        self.assertEqual(result.new_matches, 2)
        self.assertEqual(result.total_matches, 2)
        self.assertEqual(len(self.recommendations.rows), 2)
        self.assertEqual(self.profiles.stamp_calls, [(PROFILE_ID, NOW)])
        self.assertEqual(self.uow.commits, 1)
        self.assertNotIn(PROFILE_ID, self.profiles.recommendation_counts)
        self.assertTrue(any('count query failed' in line for line in logs.output))

    def test_invalid_mode(self):
        with self.assertRaises(ValueError):
            self.orchestrator.recalculate(PROFILE_ID, 'partial')


if __name__ == '__main__':
    unittest.main()
