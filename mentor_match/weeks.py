# mentor_match/weeks.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

from .config import TIMEZONE, NUM_BOOKABLE_WEEKS


@dataclass
class WeekOption:
    week_key: str
    label: str
    start_date: date   # Monday
    end_date: date     # Sunday after


def local_today(tz: str = TIMEZONE) -> date:
    return datetime.now(ZoneInfo(tz)).date()


def week_key_for(d: date) -> str:
    """
    Monday of the week containing `d`, as "YYYY-MM-DD".
    Sunday counts as the last day of the week that began the Monday before.
    """
    monday = d - timedelta(days=d.weekday())
    return monday.isoformat()


def current_week_key(today: Optional[date] = None, tz: str = TIMEZONE) -> str:
    return week_key_for(today or local_today(tz))


def parse_week_key(week_key: str) -> date:
    monday = date.fromisoformat(week_key)
    if monday.weekday() != 0:
        raise ValueError(f"Week key {week_key!r} is not a Monday.")
    return monday


def is_past_week(week_key: str, current: str) -> bool:
    # ISO dates order correctly as strings
    return week_key < current


def available_weeks(count: int = NUM_BOOKABLE_WEEKS, today: Optional[date] = None) -> List[WeekOption]:
    """This week plus the following `count - 1` weeks."""
    first_monday = parse_week_key(current_week_key(today))
    weeks: List[WeekOption] = []

    for i in range(count):
        start = first_monday + timedelta(weeks=i)
        if i == 0:
            label = "This Week"
        elif i == 1:
            label = "Next Week"
        else:
            label = f"Week of {start:%b} {start.day}"
        weeks.append(
            WeekOption(
                week_key=start.isoformat(),
                label=label,
                start_date=start,
                end_date=start + timedelta(days=6),
            )
        )

    return weeks


def week_dates(week_key: str) -> List[date]:
    """
    The seven dates of a grid row, Sunday..Saturday.
    The grid's Sunday column is the day *before* the Monday key.
    """
    sunday = parse_week_key(week_key) - timedelta(days=1)
    return [sunday + timedelta(days=i) for i in range(7)]


def date_for_weekday(week_key: str, day_of_week: int) -> date:
    return week_dates(week_key)[day_of_week]
