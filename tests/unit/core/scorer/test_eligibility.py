#!/usr/bin/env python3
"""
Unit tests for the eligibility hard filters.
"""

import unittest

from core.analyzer.models import AnalyzedProfile
from core.scorer.eligibility import (
    check_eligibility,
    check_entity_compatibility,
    has_exclusion_context,
)
from core.scorer.models import SubsidyCandidate


def make_profile(**overrides) -> AnalyzedProfile:
    data = dict(
        sector='BTP',
        region='Normandie',
        size_category='PME',
        exclusion_keywords=('musique', 'cinéma', 'agricole'),
        entity_type='SARL',
    )
    data.update(overrides)
    return AnalyzedProfile(**data)


class TestSectorExclusion(unittest.TestCase):

    def test_excluded_word_in_title_filters(self):
        candidate = SubsidyCandidate(id='s1', title="Fonds d'aide à la musique actuelle")
        eligible, reason = check_eligibility(make_profile(), candidate)
        self.assertFalse(eligible)
        self.assertIn('musique', reason)

    def test_excluded_word_only_in_description_does_not_filter(self):
        candidate = SubsidyCandidate(id='s1', title='Rénovation énergétique',
                                     description='Ouvert aussi aux salles de cinéma')
        self.assertEqual(check_eligibility(make_profile(), candidate), (True, None))

    def test_exclusion_context_keeps_candidate(self):
        title = "aide à l'investissement, sauf secteur agricole"
        self.assertTrue(has_exclusion_context(title, 'agricole'))
        candidate = SubsidyCandidate(id='s1', title=title)
        self.assertTrue(check_eligibility(make_profile(), candidate)[0])


class TestEntityCompatibility(unittest.TestCase):

    def test_no_legal_entities_is_universal(self):
        self.assertIsNone(check_entity_compatibility(None, make_profile()))
        self.assertIsNone(check_entity_compatibility([], make_profile()))

    def test_size_match(self):
        self.assertIsNone(check_entity_compatibility(['PME'], make_profile()))

    def test_entity_type_match(self):
        self.assertIsNone(check_entity_compatibility(['Société commerciale'], make_profile(size_category='GE')))

    def test_sas_profile_qualifies_as_startup(self):
        profile = make_profile(entity_type='SAS', size_category='ETI')
        self.assertIsNone(check_entity_compatibility(['Startup'], profile))

        candidate = SubsidyCandidate(id='s1', title='Bourse French Tech', legal_entities=['Startup'])
        self.assertEqual(check_eligibility(profile, candidate), (True, None))

    def test_sasu_profile_qualifies_as_startup(self):
        profile = make_profile(entity_type='SASU', size_category='TPE')
        self.assertIsNone(check_entity_compatibility(['Startup'], profile))

    def test_generic_entities(self):
        self.assertIsNone(check_entity_compatibility(['Tous'], make_profile(entity_type='Association')))

    def test_incompatible_entities(self):
        profile = make_profile(entity_type='Association', size_category='TPE')
        reason = check_entity_compatibility(['Collectivité', 'Établissement public'], profile)
        self.assertEqual(reason, 'Entités requises: Collectivité, Établissement public - Profil: TPE')

        candidate = SubsidyCandidate(id='s1', title='Appel à projets', legal_entities=['Collectivité'])
        self.assertFalse(check_eligibility(profile, candidate)[0])


if __name__ == '__main__':
    unittest.main()
