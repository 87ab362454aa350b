# tests/test_distribute.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mentor_match.matching.distribute import dedupe_windows, distribute_matches
from mentor_match.models import MatchCandidate


def cand(partner, day, start="09:00", end="10:00", week="2026-10-19"):
    return MatchCandidate(
        partner_id=partner,
        partner_email=f"{partner}@example.edu",
        day_of_week=day,
        week_key=week,
        start_time=start,
        end_time=end,
        duration=60,
    )


class TestDistributeMatches(unittest.TestCase):

    def test_one_per_day_when_more_days_than_limit(self):
        candidates = [cand(f"P{d}", d) for d in range(7)]
        result = distribute_matches(candidates, limit=5)
        self.assertEqual(len(result), 5)
        self.assertEqual([c.day_of_week for c in result], [0, 1, 2, 3, 4])

    def test_round_robin_cycles_through_days(self):
        candidates = [
            cand("A", 1, "09:00", "10:00"),
            cand("A", 1, "11:00", "12:00"),
            cand("A", 1, "13:00", "14:00"),
            cand("B", 2, "09:00", "10:00"),
            cand("C", 3, "09:00", "10:00"),
            cand("C", 3, "15:00", "16:00"),
        ]
        result = distribute_matches(candidates, limit=5)
        self.assertEqual(
            [(c.day_of_week, c.start_time) for c in result],
            [(1, "09:00"), (2, "09:00"), (3, "09:00"), (1, "11:00"), (3, "15:00")],
        )

    def test_day_groups_follow_first_appearance(self):
        candidates = [cand("A", 5), cand("B", 1, "12:00", "13:00"), cand("C", 5, "14:00", "15:00")]
        result = distribute_matches(candidates)
        self.assertEqual([c.day_of_week for c in result], [5, 1, 5])

    def test_identical_windows_collapse_first_seen_wins(self):
        candidates = [cand("A", 1), cand("B", 1)]
        unique = dedupe_windows(candidates)
        self.assertEqual(len(unique), 1)
        self.assertEqual(unique[0].partner_id, "A")
        self.assertEqual(len(distribute_matches(candidates)), 1)

    def test_same_window_different_week_still_collapses(self):
        # the dedupe key is (day, start, end) only
        candidates = [cand("A", 1, week="2026-10-19"), cand("B", 1, week="2026-10-26")]
        self.assertEqual(len(distribute_matches(candidates)), 1)

    def test_exhausts_groups_below_limit(self):
        candidates = [cand("A", 1), cand("B", 2)]
        self.assertEqual(len(distribute_matches(candidates, limit=5)), 2)

    def test_empty_and_zero_limit(self):
        self.assertEqual(distribute_matches([]), [])
        self.assertEqual(distribute_matches([cand("A", 1)], limit=0), [])

    def test_never_more_than_limit(self):
        candidates = [cand("A", d % 3, f"{8 + d:02d}:00", f"{9 + d:02d}:00") for d in range(12)]
        self.assertEqual(len(distribute_matches(candidates, limit=5)), 5)


if __name__ == '__main__':
    unittest.main()
