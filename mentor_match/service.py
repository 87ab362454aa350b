# mentor_match/service.py
"""
Request-level operations over the store:

- check_email: does this email have a registration, and what slots
- register: replace a user's availability (and mentor abilities)
- find_matches_for_user: run the matcher for a stored user
- confirm_match: record an invitation that was sent
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from .config import ABILITIES, USER_TYPES
from .matching.engine import find_matches
from .models import (
    InvalidSlotError,
    MatchCandidate,
    PastWeekError,
    RegistrationError,
    TimeSlot,
    UserNotFoundError,
)
from .storage.sqlite_store import SQLiteStore
from .weeks import current_week_key, is_past_week, parse_week_key

SlotInput = Union[TimeSlot, Dict[str, Any]]


def check_email(store: SQLiteStore, email: str, today: Optional[date] = None) -> Dict[str, Any]:
    if not email:
        raise RegistrationError("Email is required.")

    user = store.get_user_by_email(email)
    if user is None:
        return {"exists": False, "availability": [], "user_type": None}

    slots = store.availability_for_user(user.id, current_week_key(today))
    return {
        "exists": True,
        "availability": [s.as_dict() for s in slots],
        "user_type": user.user_type,
    }


def _coerce_slots(availability: Sequence[SlotInput], week_key: str) -> List[TimeSlot]:
    slots: List[TimeSlot] = []
    for item in availability:
        if isinstance(item, TimeSlot):
            slots.append(item)
            continue
        try:
            slots.append(TimeSlot.from_dict(item, default_week_key=week_key))
        except KeyError as e:
            raise InvalidSlotError(f"Slot {item!r} is missing field {e.args[0]!r}") from e

    for s in slots:
        try:
            parse_week_key(s.week_key)
        except ValueError as e:
            raise InvalidSlotError(
                f"week_key must be the ISO date of a Monday, got {s.week_key!r}"
            ) from e
    return slots


def register(
    store: SQLiteStore,
    email: str,
    user_type: str,
    availability: Optional[Sequence[SlotInput]],
    abilities: Optional[Sequence[str]] = None,
    today: Optional[date] = None,
) -> str:
    """
    Store a registration and return the user id.

    Existing users keep their id; their slots and abilities are replaced
    wholesale. Slots without a week key land in the current week. Abilities
    are kept for mentors only.
    """
    if not email or not user_type or availability is None:
        raise RegistrationError("Missing required fields: email, user_type and availability.")
    if user_type not in USER_TYPES:
        raise RegistrationError(f"Unknown user_type {user_type!r}; expected one of {USER_TYPES}.")

    week_key = current_week_key(today)
    slots = _coerce_slots(availability, week_key)

    past = [s for s in slots if is_past_week(s.week_key, week_key)]
    if past:
        raise PastWeekError(
            f"Cannot schedule availability for past weeks: "
            f"{sorted({s.week_key for s in past})} (current week {week_key})."
        )

    kept_abilities: List[str] = []
    if user_type == "mentor" and abilities:
        unknown = [a for a in abilities if a not in ABILITIES]
        if unknown:
            raise RegistrationError(f"Unknown abilities: {unknown}")
        kept_abilities = list(abilities)

    user = store.upsert_user(email, user_type, week_key)
    store.replace_registration(user.id, slots, kept_abilities, week_key)
    return user.id


def find_matches_for_user(
    store: SQLiteStore,
    user_id: str,
    today: Optional[date] = None,
) -> List[MatchCandidate]:
    week_key = current_week_key(today)
    user = store.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    user_slots = store.availability_for_user(user.id, week_key)
    partner_slots = store.partner_slots(user.opposite_type, week_key)
    abilities = store.mentor_abilities(week_key) if user.user_type == "mentee" else None

    return find_matches(
        user,
        user_slots,
        partner_slots,
        abilities_by_user=abilities,
        current_week_key=week_key,
    )


def confirm_match(
    store: SQLiteStore,
    mentor_email: str,
    mentee_email: str,
    scheduled_date: str,
    scheduled_time: str,
) -> Optional[int]:
    """Record a sent invitation; None when either email is unknown."""
    if not (mentor_email and mentee_email and scheduled_date and scheduled_time):
        raise RegistrationError("Missing required fields for the invitation.")

    mentor = store.get_user_by_email(mentor_email)
    mentee = store.get_user_by_email(mentee_email)
    if mentor is None or mentee is None:
        return None

    return store.record_match(mentor.id, mentee.id, scheduled_date, scheduled_time)
