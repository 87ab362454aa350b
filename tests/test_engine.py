# tests/test_engine.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mentor_match.matching.candidates import generate_candidates
from mentor_match.matching.engine import find_matches
from mentor_match.models import PartnerSlot, TimeSlot, User, UserNotFoundError

WEEK = "2026-10-19"
NEXT_WEEK = "2026-10-26"
LAST_WEEK = "2026-10-12"


def slot(day, start, end, week=WEEK):
    return TimeSlot(day_of_week=day, start_time=start, end_time=end, week_key=week)


def partner(user_id, day, start, end, week=WEEK):
    return PartnerSlot(user_id=user_id, email=f"{user_id}@example.edu", slot=slot(day, start, end, week))


MENTOR = User(id="A", email="A@example.edu", user_type="mentor", week_key=WEEK)
MENTEE = User(id="B", email="B@example.edu", user_type="mentee", week_key=WEEK)


class TestGenerateCandidates(unittest.TestCase):

    def test_compares_every_pair(self):
        own = [slot(1, "09:00", "11:00"), slot(2, "14:00", "15:00")]
        others = [
            partner("M1", 1, "10:00", "12:00"),
            partner("M2", 1, "08:00", "09:30"),
            partner("M3", 2, "14:30", "16:00"),
            partner("M4", 2, "15:00", "16:00"),   # touching
        ]
        result = generate_candidates(own, others)
        self.assertEqual(
            [(c.partner_id, c.start_time, c.end_time, c.duration) for c in result],
            [("M1", "10:00", "11:00", 60), ("M2", "09:00", "09:30", 30), ("M3", "14:30", "15:00", 30)],
        )

    def test_abilities_attached_when_given(self):
        result = generate_candidates(
            [slot(1, "09:00", "10:00")],
            [partner("M1", 1, "09:00", "10:00"), partner("M2", 1, "09:00", "10:00")],
            abilities_by_user={"M1": ["Figma Proficiency"]},
        )
        self.assertEqual(result[0].abilities, ["Figma Proficiency"])
        self.assertEqual(result[1].abilities, [])


class TestFindMatches(unittest.TestCase):

    def test_unknown_user(self):
        with self.assertRaises(UserNotFoundError) as ctx:
            find_matches(None, [], [], user_id="ghost")
        self.assertEqual(ctx.exception.user_id, "ghost")
        self.assertIsInstance(ctx.exception, LookupError)

    def test_empty_inputs_give_empty_result(self):
        self.assertEqual(find_matches(MENTEE, [], [partner("A", 1, "09:00", "10:00")]), [])
        self.assertEqual(find_matches(MENTEE, [slot(1, "09:00", "10:00")], []), [])

    def test_mentor_and_mentee_end_to_end(self):
        mentor_slots = [slot(1, "09:00", "10:00")]
        mentee_slots = [slot(1, "09:30", "10:30")]

        for_mentee = find_matches(
            MENTEE,
            mentee_slots,
            [PartnerSlot("A", "A@example.edu", mentor_slots[0])],
            abilities_by_user={"A": ["Visual Design"]},
        )
        self.assertEqual(len(for_mentee), 1)
        m = for_mentee[0]
        self.assertEqual(
            (m.partner_id, m.day_of_week, m.week_key, m.start_time, m.end_time, m.duration),
            ("A", 1, WEEK, "09:30", "10:00", 30),
        )
        self.assertEqual(m.abilities, ["Visual Design"])

        for_mentor = find_matches(
            MENTOR,
            mentor_slots,
            [PartnerSlot("B", "B@example.edu", mentee_slots[0])],
            abilities_by_user={"B": ["ignored"]},
        )
        self.assertEqual(len(for_mentor), 1)
        self.assertEqual(for_mentor[0].partner_id, "B")
        self.assertEqual(for_mentor[0].abilities, [])
        self.assertEqual(for_mentor[0].as_dict()["startTime"], "09:30")

    def test_past_weeks_are_dropped(self):
        result = find_matches(
            MENTEE,
            [slot(1, "09:00", "10:00", LAST_WEEK), slot(1, "09:00", "10:00", NEXT_WEEK)],
            [partner("A", 1, "09:00", "10:00", LAST_WEEK), partner("A", 1, "09:00", "10:00", NEXT_WEEK)],
            current_week_key=WEEK,
        )
        self.assertEqual([m.week_key for m in result], [NEXT_WEEK])

    def test_same_time_in_other_week_is_not_a_match(self):
        result = find_matches(
            MENTEE,
            [slot(1, "09:00", "10:00", WEEK)],
            [partner("A", 1, "09:00", "10:00", NEXT_WEEK)],
        )
        self.assertEqual(result, [])

    def test_limit_and_day_spread(self):
        own = [slot(d, "08:00", "20:00") for d in range(7)]
        others = [partner("A", d, "09:00", "10:00") for d in range(7)]
        others += [partner("B", d, "12:00", "13:00") for d in range(7)]
        result = find_matches(MENTEE, own, others)
        self.assertEqual(len(result), 5)
        self.assertEqual(len({m.day_of_week for m in result}), 5)

    def test_rerun_is_stable(self):
        own = [slot(1, "09:00", "12:00"), slot(3, "09:00", "12:00")]
        others = [partner("A", 1, "10:00", "11:00"), partner("B", 3, "09:00", "09:45"), partner("C", 1, "10:00", "11:00")]
        first = [m.as_dict() for m in find_matches(MENTEE, own, others)]
        second = [m.as_dict() for m in find_matches(MENTEE, own, others)]
        self.assertEqual(first, second)
        self.assertEqual(len(first), 2)


if __name__ == '__main__':
    unittest.main()
