# mentor_match/matching/engine.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..config import MAX_MATCHES_DEFAULT, MIN_SESSION_MINUTES
from ..models import MatchCandidate, PartnerSlot, TimeSlot, User, UserNotFoundError
from .candidates import generate_candidates
from .distribute import distribute_matches


def find_matches(
    user: Optional[User],
    user_slots: Sequence[TimeSlot],
    partner_slots: Sequence[PartnerSlot],
    abilities_by_user: Optional[Dict[str, List[str]]] = None,
    current_week_key: Optional[str] = None,
    limit: int = MAX_MATCHES_DEFAULT,
    min_minutes: int = MIN_SESSION_MINUTES,
    user_id: Optional[str] = None,
) -> List[MatchCandidate]:
    """
    Overlapping windows between `user` and the opposite-type partners,
    reduced to a day-diversified list of at most `limit`.

    `user` is the looked-up record (None when the lookup failed, in which
    case `user_id` is only used for the error message). No overlap, or an
    empty slot list on either side, is an empty result.
    """
    if user is None:
        raise UserNotFoundError(user_id)

    if current_week_key is not None:
        user_slots = [s for s in user_slots if s.week_key >= current_week_key]
        partner_slots = [p for p in partner_slots if p.slot.week_key >= current_week_key]

    if not user_slots or not partner_slots:
        return []

    # Mentees see their mentors' abilities; mentors see none.
    abilities = None
    if user.user_type == "mentee":
        abilities = abilities_by_user or {}

    candidates = generate_candidates(
        user_slots,
        partner_slots,
        abilities_by_user=abilities,
        min_minutes=min_minutes,
    )
    return distribute_matches(candidates, limit=limit)
