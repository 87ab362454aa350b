# mentor_match/data_generation/toy_dataset.py
from __future__ import annotations

import random
from datetime import date
from typing import Dict, List, Optional, Tuple

from ..config import (
    ABILITIES,
    DEFAULT_SEED,
    NUM_MENTEES_DEFAULT,
    NUM_MENTORS_DEFAULT,
)
from ..models import TimeSlot
from ..service import register
from ..storage.sqlite_store import SQLiteStore
from ..weeks import available_weeks

# Grid rows offered by the availability picker: 08:00 .. 20:00, half-hour steps
GRID_START_MINUTES = 8 * 60
GRID_END_MINUTES = 20 * 60
GRID_STEP_MINUTES = 30


def _hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def random_slots(
    rng: random.Random,
    week_keys: List[str],
    slots_per_user: int = 4,
    weekdays_only: bool = True,
) -> List[TimeSlot]:
    """
    `slots_per_user` random windows of 1h to 2h on the half-hour grid,
    spread over the given weeks.
    """
    days = list(range(1, 6)) if weekdays_only else list(range(0, 7))
    steps = (GRID_END_MINUTES - GRID_START_MINUTES) // GRID_STEP_MINUTES

    slots: List[TimeSlot] = []
    for _ in range(slots_per_user):
        length = rng.randint(2, 4)   # 1h .. 2h
        start_step = rng.randint(0, steps - length)
        start = GRID_START_MINUTES + start_step * GRID_STEP_MINUTES
        slots.append(
            TimeSlot(
                day_of_week=rng.choice(days),
                start_time=_hhmm(start),
                end_time=_hhmm(start + length * GRID_STEP_MINUTES),
                week_key=rng.choice(week_keys),
            )
        )
    return slots


def make_toy_users(
    num_mentors: int = NUM_MENTORS_DEFAULT,
    num_mentees: int = NUM_MENTEES_DEFAULT,
    seed: int = DEFAULT_SEED,
    num_weeks: int = 2,
    slots_per_user: int = 4,
    today: Optional[date] = None,
) -> List[Tuple[str, str, List[TimeSlot], List[str]]]:
    """
    Return (email, user_type, slots, abilities) tuples.
    Mentors get 2 random abilities each (toy behaviour); mentees none.
    """
    if num_weeks < 1:
        raise ValueError(f"num_weeks must be at least 1, got {num_weeks}.")

    rng = random.Random(seed)
    week_keys = [w.week_key for w in available_weeks(count=num_weeks, today=today)]

    users: List[Tuple[str, str, List[TimeSlot], List[str]]] = []

    for idx in range(1, num_mentors + 1):
        users.append(
            (
                f"mentor{idx:02d}@example.edu",
                "mentor",
                random_slots(rng, week_keys, slots_per_user),
                rng.sample(ABILITIES, k=2),
            )
        )

    for idx in range(1, num_mentees + 1):
        users.append(
            (
                f"mentee{idx:02d}@example.edu",
                "mentee",
                random_slots(rng, week_keys, slots_per_user),
                [],
            )
        )

    return users


def seed_store(
    store: SQLiteStore,
    num_mentors: int = NUM_MENTORS_DEFAULT,
    num_mentees: int = NUM_MENTEES_DEFAULT,
    seed: int = DEFAULT_SEED,
    today: Optional[date] = None,
) -> Dict[str, str]:
    """Register a toy population; returns email -> user id."""
    store.init_schema()
    ids: Dict[str, str] = {}
    for email, user_type, slots, abilities in make_toy_users(
        num_mentors=num_mentors,
        num_mentees=num_mentees,
        seed=seed,
        today=today,
    ):
        ids[email] = register(store, email, user_type, slots, abilities, today=today)
    return ids
