# mentor_match/matching/overlap.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import MIN_SESSION_MINUTES
from ..models import TimeSlot


@dataclass(frozen=True)
class OverlapWindow:
    start_time: str
    end_time: str
    duration: int


def time_to_minutes(t_str: str) -> int:
    """Converts '09:30' to minutes from midnight."""
    hours, minutes = t_str.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def find_time_overlap(slot_a: TimeSlot, slot_b: TimeSlot) -> Optional[OverlapWindow]:
    """
    Intersection of two [start, end) windows.

    Slots are only comparable on the same day of the same week; anything
    else, and intervals that merely touch, give None.
    """
    if slot_a.day_of_week != slot_b.day_of_week or slot_a.week_key != slot_b.week_key:
        return None

    start = max(time_to_minutes(slot_a.start_time), time_to_minutes(slot_b.start_time))
    end = min(time_to_minutes(slot_a.end_time), time_to_minutes(slot_b.end_time))

    if start >= end:
        return None

    return OverlapWindow(
        start_time=minutes_to_time(start),
        end_time=minutes_to_time(end),
        duration=end - start,
    )


def is_valid_overlap(window: Optional[OverlapWindow], min_minutes: int = MIN_SESSION_MINUTES) -> bool:
    return window is not None and window.duration >= min_minutes
