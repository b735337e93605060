#!/usr/bin/env python3
"""
API tests for the recommendation and cron endpoints.

The application context is wired with in-memory stores through FastAPI
dependency overrides, so no database is needed.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from fastapi.testclient import TestClient

from core.analyzer.models import ProfileInput
from core.app_context import AppContext
from core.config_loader import AppConfig
from core.scorer.models import SubsidyCandidate
from tests.mocks.store_mocks import (
    FakeUnitOfWork,
    InMemoryCandidateRepository,
    InMemoryProfileStore,
    InMemoryRecommendationStore,
)
from web.backend.app import app
from web.backend.dependencies import get_app_config, get_app_context
from web.backend.routers.recommendations import limiter

PROFILE_ID = 'a1c2e3f4-0000-4000-8000-000000000001'
CRON_SECRET = 's3cret-token'


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        limiter.reset()
        created = datetime.now(timezone.utc) - timedelta(days=30)

        self.profiles = InMemoryProfileStore([
            ProfileInput(id=PROFILE_ID, sector='Numérique', region='Bretagne', employees='20'),
        ])
        self.subsidies = InMemoryCandidateRepository()
        self.subsidies.add(SubsidyCandidate(
            id='sub-regional', title={'fr': 'Aide numérique Bretagne'}, agency='Région Bretagne',
            region=['Bretagne'], primary_sector='Numérique', amount_max=80000, created_at=created,
        ))
        self.subsidies.add(SubsidyCandidate(
            id='sub-national', title='Prêt croissance', region=['National'], created_at=created,
        ))
        self.recommendations = InMemoryRecommendationStore(self.subsidies)
        self.uow = FakeUnitOfWork(self.profiles, self.subsidies, self.recommendations)

        self.config = AppConfig()
        self.config.cron.secret = CRON_SECRET
        self.ctx = AppContext.build(self.config, uow_factory=self.uow, sleep=lambda seconds: None)

        app.dependency_overrides[get_app_context] = lambda: self.ctx
        app.dependency_overrides[get_app_config] = lambda: self.config
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def calculate(self, profile_id=PROFILE_ID, mode='full'):
        return self.client.post('/api/recommendations/calculate', json={'profile_id': profile_id, 'mode': mode})


class TestHealth(ApiTestCase):

    def test_health(self):
        response = self.client.get('/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'healthy', 'service': 'subsidyscout-api'})


class TestCalculateEndpoint(ApiTestCase):

    def test_calculate_success(self):
        response = self.calculate()

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['profile_id'], PROFILE_ID)
        self.assertEqual(data['mode'], 'full')
        self.assertEqual(data['new_matches'], 2)
        self.assertEqual(data['total_matches'], 2)
        self.assertIn('processing_time_ms', data)

        self.subsidies.add(SubsidyCandidate(
            id='sub-new', title={'fr': 'Aide numérique Bretagne'}, region=['Bretagne'],
            primary_sector='Numérique', created_at=datetime.now(timezone.utc) + timedelta(minutes=1),
        ))
        again = self.calculate(mode='incremental').json()
        self.assertEqual(again['new_matches'], 1)
        self.assertEqual(again['total_matches'], 3)
        self.assertEqual(again['mode'], 'incremental')

    def test_calculate_unknown_profile(self):
        response = self.calculate(profile_id='does-not-exist')

        self.assertEqual(response.status_code, 404)
        data = response.json()
        self.assertEqual(data['error'], 'Profile not found: Unknown')
        self.assertIsInstance(data['processing_time_ms'], int)

    def test_calculate_fetch_failure(self):
        self.subsidies.fail_fetch = RuntimeError('statement timeout')

        response = self.calculate()

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['error'], 'Failed to fetch subsidies: statement timeout')

    def test_calculate_unexpected_failure(self):
        with patch.object(self.ctx.orchestrator.engine, 'rank_candidates', side_effect=RuntimeError('ranking failed')):
            response = self.calculate()

        self.assertEqual(response.status_code, 500)
        data = response.json()
        self.assertEqual(data['error'], 'ranking failed')
        self.assertIsInstance(data['processing_time_ms'], int)
        self.assertEqual(self.recommendations.rows, {})

    def test_calculate_rejects_unknown_mode(self):
        self.assertEqual(self.calculate(mode='partial').status_code, 422)

    def test_calculate_requires_profile_id(self):
        response = self.client.post('/api/recommendations/calculate', json={'mode': 'full'})
        self.assertEqual(response.status_code, 422)


class TestListAndDismiss(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.calculate()

    def test_list_recommendations(self):
        response = self.client.get(f'/api/recommendations/{PROFILE_ID}')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['count'], 2)
        scores = [r['match_score'] for r in data['recommendations']]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(data['recommendations'][0]['subsidy_id'], 'sub-regional')
        self.assertIn('Région: Bretagne', data['recommendations'][0]['match_reasons'])

    def test_dismiss(self):
        response = self.client.post(f'/api/recommendations/{PROFILE_ID}/sub-national/dismiss')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['subsidy_id'], 'sub-national')
        self.assertEqual(self.profiles.recommendation_counts[PROFILE_ID], 1)

        active = self.client.get(f'/api/recommendations/{PROFILE_ID}').json()
        self.assertEqual([r['subsidy_id'] for r in active['recommendations']], ['sub-regional'])

        everything = self.client.get(f'/api/recommendations/{PROFILE_ID}?include_dismissed=true').json()
        self.assertEqual(everything['count'], 2)

    def test_dismiss_unknown_recommendation(self):
        response = self.client.post(f'/api/recommendations/{PROFILE_ID}/sub-missing/dismiss')

        self.assertEqual(response.status_code, 404)
        data = response.json()
        self.assertFalse(data['success'])
        self.assertEqual(data['type'], 'RecommendationNotFoundException')


class TestCronEndpoint(ApiTestCase):

    url = '/api/cron/refresh-recommendations'

    def auth(self, token=CRON_SECRET):
        return {'Authorization': f'Bearer {token}'}

    def test_requires_secret(self):
        self.assertEqual(self.client.post(self.url).status_code, 401)
        response = self.client.post(self.url, headers=self.auth('wrong'))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['error'], 'Unauthorized')

    def test_open_when_no_secret_configured(self):
        self.config.cron.secret = None
        self.assertEqual(self.client.post(self.url).status_code, 200)

    def test_refresh_partition(self):
        # 'a' = 10, 10 % 7 = 3
        response = self.client.post(self.url, json={'partition': 3}, headers=self.auth())

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['profiles_processed'], 1)
        self.assertEqual(data['partition'], 3)
        self.assertEqual(data['total_partitions'], 7)
        self.assertEqual(data['results'], {'success': 1, 'failed': 0, 'errors': []})
        self.assertEqual(self.recommendations.count_active(PROFILE_ID), 2)

    def test_refresh_without_body_processes_all(self):
        response = self.client.post(self.url, headers=self.auth())

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['partition'], 'all')
        self.assertEqual(response.json()['profiles_processed'], 1)

    def test_refresh_empty_partition(self):
        data = self.client.post(self.url, json={'partition': 0}, headers=self.auth()).json()

        self.assertEqual(data['profiles_processed'], 0)
        self.assertEqual(data['message'], 'No profiles need refresh')

    def test_invalid_partition(self):
        for partition in (7, 'tuesday'):
            with self.subTest(partition=partition):
                response = self.client.post(self.url, json={'partition': partition}, headers=self.auth())
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()['type'], 'InvalidPartitionException')

    def test_failed_profile_is_reported(self):
        self.subsidies.fail_fetch = RuntimeError('statement timeout')

        data = self.client.post(self.url, json={'partition': None}, headers=self.auth()).json()

        self.assertTrue(data['success'])
        self.assertEqual(data['results']['failed'], 1)
        self.assertEqual(
            data['results']['errors'],
            [f'{PROFILE_ID}: Failed to fetch subsidies: statement timeout'],
        )


if __name__ == '__main__':
    unittest.main()
