#!/usr/bin/env python3
"""
Unit tests for profile partitioning.
"""

import random
import unittest
import uuid
from collections import Counter
from datetime import datetime, timedelta, timezone

from pipeline.partition import current_weekday_partition, get_profile_partition, resolve_partition

WEDNESDAY = datetime(2026, 10, 14, 9, 30, tzinfo=timezone.utc)


class TestGetProfilePartition(unittest.TestCase):

    def test_partition_is_first_hex_digit_mod_7(self):
        self.assertEqual(get_profile_partition('0b7c1e2a-0000-4000-8000-000000000000'), 0)
        self.assertEqual(get_profile_partition('7b7c1e2a-0000-4000-8000-000000000000'), 0)
        self.assertEqual(get_profile_partition('3f000000-0000-4000-8000-000000000000'), 3)
        self.assertEqual(get_profile_partition('a0000000-0000-4000-8000-000000000000'), 3)
        self.assertEqual(get_profile_partition('F0000000-0000-4000-8000-000000000000'), 1)

    def test_partition_is_stable(self):
        profile_id = str(uuid.uuid4())
        first = get_profile_partition(profile_id)
        for _ in range(5):
            self.assertEqual(get_profile_partition(profile_id), first)

    def test_every_hex_digit_lands_in_a_partition(self):
        counts = Counter(get_profile_partition(f'{digit}0000000') for digit in '0123456789abcdef')
        self.assertEqual(set(counts), set(range(7)))
        self.assertEqual(sum(counts.values()), 16)
        # 16 digits over 7 partitions: partitions 0 and 1 get three digits
        self.assertEqual(counts[0], 3)
        self.assertEqual(counts[1], 3)
        self.assertEqual(counts[6], 2)

    def test_random_ids_spread_like_first_hex_digit(self):
        rng = random.Random(20261014)
        total = 10_000
        ids = [str(uuid.UUID(int=rng.getrandbits(128), version=4)) for _ in range(total)]

        counts = Counter(get_profile_partition(profile_id) for profile_id in ids)

        self.assertEqual(sum(counts.values()), total)
        for partition in range(7):
            expected = 3 / 16 if partition in (0, 1) else 2 / 16
            with self.subTest(partition=partition):
                self.assertAlmostEqual(counts[partition] / total, expected, delta=0.02)

    def test_non_hex_first_character(self):
        self.assertIsNone(get_profile_partition('zeta'))
        self.assertIsNone(get_profile_partition('-123'))
        self.assertIsNone(get_profile_partition(''))

    def test_custom_partition_count(self):
        self.assertEqual(get_profile_partition('f000', total_partitions=4), 3)


class TestResolvePartition(unittest.TestCase):

    def test_none_means_all(self):
        self.assertIsNone(resolve_partition(None))

    def test_integer_and_numeric_string(self):
        self.assertEqual(resolve_partition(0), 0)
        self.assertEqual(resolve_partition(6), 6)
        self.assertEqual(resolve_partition('4'), 4)

    def test_auto_uses_utc_weekday_with_sunday_zero(self):
        self.assertEqual(resolve_partition('auto', clock=lambda: WEDNESDAY), 3)
        sunday = WEDNESDAY + timedelta(days=4)
        saturday = WEDNESDAY + timedelta(days=3)
        self.assertEqual(resolve_partition('auto', clock=lambda: sunday), 0)
        self.assertEqual(resolve_partition('AUTO', clock=lambda: saturday), 6)

    def test_auto_converts_to_utc(self):
        # Wednesday 23:30 at UTC-2 is already Thursday in UTC
        local = datetime(2026, 10, 14, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
        self.assertEqual(current_weekday_partition(local), 4)

    def test_invalid_values(self):
        for value in (7, -1, 'monday', '', 2.5, True):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    resolve_partition(value)


if __name__ == '__main__':
    unittest.main()
