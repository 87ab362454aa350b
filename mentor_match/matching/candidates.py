# mentor_match/matching/candidates.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..config import MIN_SESSION_MINUTES
from ..models import MatchCandidate, PartnerSlot, TimeSlot
from .overlap import find_time_overlap, is_valid_overlap


def generate_candidates(
    user_slots: Iterable[TimeSlot],
    partner_slots: Iterable[PartnerSlot],
    abilities_by_user: Optional[Dict[str, List[str]]] = None,
    min_minutes: int = MIN_SESSION_MINUTES,
) -> List[MatchCandidate]:
    """
    Compare every own slot against every partner slot (same day, same week)
    and keep the overlaps of at least `min_minutes`.

    Own slots drive the outer loop, so output order follows the input order.
    `abilities_by_user` is only passed for mentee requests; partners missing
    from it get an empty list.
    """
    partner_slots = list(partner_slots)
    candidates: List[MatchCandidate] = []

    for own in user_slots:
        for other in partner_slots:
            window = find_time_overlap(own, other.slot)
            if not is_valid_overlap(window, min_minutes):
                continue

            abilities: List[str] = []
            if abilities_by_user is not None:
                abilities = list(abilities_by_user.get(other.user_id, []))

            candidates.append(
                MatchCandidate(
                    partner_id=other.user_id,
                    partner_email=other.email,
                    day_of_week=own.day_of_week,
                    week_key=own.week_key,
                    start_time=window.start_time,
                    end_time=window.end_time,
                    duration=window.duration,
                    abilities=abilities,
                )
            )

    return candidates
