# mentor_match/matching/distribute.py
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List

from ..config import MAX_MATCHES_DEFAULT
from ..models import MatchCandidate


def dedupe_windows(candidates: List[MatchCandidate]) -> List[MatchCandidate]:
    """
    Collapse candidates sharing (day, start, end). The first one seen wins,
    so a second partner offering the exact same window is dropped.
    """
    seen = set()
    unique: List[MatchCandidate] = []
    for c in candidates:
        if c.window_key in seen:
            continue
        seen.add(c.window_key)
        unique.append(c)
    return unique


def distribute_matches(
    candidates: List[MatchCandidate],
    limit: int = MAX_MATCHES_DEFAULT,
) -> List[MatchCandidate]:
    """
    Reduce candidates to at most `limit`, spread across days:

      1) dedupe by window (see dedupe_windows)
      2) group by day_of_week, days kept in first-appearance order
      3) take one per day per pass until `limit` or every group is empty
    """
    if limit <= 0:
        return []

    unique = dedupe_windows(candidates)

    day_groups: Dict[int, Deque[MatchCandidate]] = {}
    for c in unique:
        day_groups.setdefault(c.day_of_week, deque()).append(c)

    result: List[MatchCandidate] = []
    while len(result) < limit and any(day_groups.values()):
        for group in day_groups.values():
            if not group:
                continue
            result.append(group.popleft())
            if len(result) == limit:
                break

    return result
