# tests/test_overlap.py
import unittest
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mentor_match.matching.overlap import (
    find_time_overlap,
    is_valid_overlap,
    minutes_to_time,
    time_to_minutes,
)
from mentor_match.models import InvalidSlotError, TimeSlot

WEEK = "2026-10-19"


def slot(start, end, day=1, week=WEEK):
    return TimeSlot(day_of_week=day, start_time=start, end_time=end, week_key=week)


class TestTimeConversion(unittest.TestCase):

    def test_round_trip_examples(self):
        self.assertEqual(time_to_minutes("00:00"), 0)
        self.assertEqual(time_to_minutes("09:30"), 570)
        self.assertEqual(time_to_minutes("23:59"), 1439)
        self.assertEqual(minutes_to_time(570), "09:30")
        self.assertEqual(minutes_to_time(5), "00:05")


class TestFindTimeOverlap(unittest.TestCase):

    def test_partial_overlap_at_minimum_length(self):
        window = find_time_overlap(slot("09:00", "10:00"), slot("09:30", "10:30"))
        self.assertEqual((window.start_time, window.end_time, window.duration), ("09:30", "10:00", 30))
        self.assertTrue(is_valid_overlap(window))

    def test_touching_slots_do_not_overlap(self):
        self.assertIsNone(find_time_overlap(slot("09:00", "10:00"), slot("10:00", "11:00")))
        self.assertFalse(is_valid_overlap(None))

    def test_identical_slots_give_full_window(self):
        window = find_time_overlap(slot("14:00", "16:00"), slot("14:00", "16:00"))
        self.assertEqual((window.start_time, window.end_time, window.duration), ("14:00", "16:00", 120))

    def test_contained_slot(self):
        window = find_time_overlap(slot("08:00", "12:00"), slot("09:15", "10:00"))
        self.assertEqual((window.start_time, window.end_time, window.duration), ("09:15", "10:00", 45))

    def test_short_overlap_is_not_a_session(self):
        window = find_time_overlap(slot("09:00", "10:00"), slot("09:40", "11:00"))
        self.assertEqual(window.duration, 20)
        self.assertFalse(is_valid_overlap(window))
        self.assertTrue(is_valid_overlap(window, min_minutes=20))

    def test_different_week_never_overlaps(self):
        self.assertIsNone(
            find_time_overlap(slot("09:00", "10:00"), slot("09:00", "10:00", week="2026-10-26"))
        )

    def test_different_day_never_overlaps(self):
        self.assertIsNone(find_time_overlap(slot("09:00", "10:00", day=1), slot("09:00", "10:00", day=2)))


class TestTimeSlotValidation(unittest.TestCase):

    def test_start_must_precede_end(self):
        with self.assertRaises(InvalidSlotError):
            slot("10:00", "10:00")
        with self.assertRaises(InvalidSlotError):
            slot("11:00", "10:00")

    def test_day_range(self):
        with self.assertRaises(InvalidSlotError):
            slot("09:00", "10:00", day=7)
        with self.assertRaises(InvalidSlotError):
            TimeSlot(True, "09:00", "10:00", WEEK)

    def test_time_format(self):
        with self.assertRaises(InvalidSlotError):
            slot("9:00", "10:00")
        with self.assertRaises(ValueError):
            slot("09:00", "24:00")

    def test_from_dict_uses_default_week(self):
        s = TimeSlot.from_dict({"dayOfWeek": 3, "startTime": "09:00", "endTime": "09:30"}, default_week_key=WEEK)
        self.assertEqual(s.week_key, WEEK)
        self.assertEqual(s.as_dict()["dayOfWeek"], 3)


if __name__ == '__main__':
    unittest.main()
