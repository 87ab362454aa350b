# mentor_match/scheduling/session_plan.py
from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

import pulp

from ..config import MAX_SESSIONS_PER_MENTOR
from ..matching.candidates import generate_candidates
from ..matching.overlap import time_to_minutes
from ..models import MatchCandidate
from ..storage.sqlite_store import SQLiteStore
from ..weeks import current_week_key


def _windows_clash(a: MatchCandidate, b: MatchCandidate) -> bool:
    if a.week_key != b.week_key or a.day_of_week != b.day_of_week:
        return False
    return (
        time_to_minutes(a.start_time) < time_to_minutes(b.end_time)
        and time_to_minutes(b.start_time) < time_to_minutes(a.end_time)
    )


def collect_mentee_candidates(
    store: SQLiteStore,
    today: Optional[date] = None,
) -> Dict[str, List[MatchCandidate]]:
    """
    Every mentee's full (unreduced) candidate list against all mentors,
    current and future weeks only. Mentees without any overlap are left out.
    """
    week_key = current_week_key(today)
    mentor_slots = store.partner_slots("mentor", week_key)
    abilities = store.mentor_abilities(week_key)

    by_mentee: Dict[str, List[MatchCandidate]] = {}
    for mentee_slot in store.partner_slots("mentee", week_key):
        found = generate_candidates([mentee_slot.slot], mentor_slots, abilities)
        if found:
            by_mentee.setdefault(mentee_slot.user_id, []).extend(found)
    return by_mentee


def plan_sessions(
    candidates_by_mentee: Dict[str, List[MatchCandidate]],
    max_sessions_per_mentor: int = MAX_SESSIONS_PER_MENTOR,
) -> Tuple[str, Dict[str, MatchCandidate]]:
    """
    Pick at most one session per mentee across the whole pool.

    Variables:
        x[i, j] = 1 if mentee i takes its j-th candidate (partner = mentor)

    Rules encoded:

      1) Each mentee gets at most one session:
           ∀i: sum_j x[i,j] ≤ 1

      2) Each mentor hosts at most `max_sessions_per_mentor` sessions:
           ∀m: sum_{(i,j) with mentor m} x[i,j] ≤ cap

      3) A mentor is never in two overlapping windows (same week and day):
           ∀ clashing pairs (i,j), (i',j') of mentor m: x[i,j] + x[i',j'] ≤ 1

    Objective: maximize the number of sessions; total minutes break ties.
    """
    mentee_ids = sorted(candidates_by_mentee)
    if not mentee_ids:
        return "Optimal", {}

    # ---------- Problem ----------
    prob = pulp.LpProblem("Mentor_Match_Session_Plan", pulp.LpMaximize)

    # ---------- Decision variables ----------
    x: Dict[Tuple[int, int], pulp.LpVariable] = {}
    options: Dict[Tuple[int, int], MatchCandidate] = {}
    for i, mentee_id in enumerate(mentee_ids):
        for j, cand in enumerate(candidates_by_mentee[mentee_id]):
            x[(i, j)] = pulp.LpVariable(f"x_{i}_{j}", lowBound=0, upBound=1, cat="Binary")
            options[(i, j)] = cand

    # ---------- Objective ----------
    # One extra session must outweigh any difference in minutes.
    session_weight = sum(c.duration for c in options.values()) + 1
    prob += pulp.lpSum(
        (session_weight + options[key].duration) * var for key, var in x.items()
    ), "Maximize_Sessions_Then_Minutes"

    # ---------- Constraints ----------

    # (1) At most one session per mentee
    for i in range(len(mentee_ids)):
        keys = [key for key in x if key[0] == i]
        prob += (
            pulp.lpSum(x[key] for key in keys) <= 1,
            f"One_session_mentee_{i}",
        )

    by_mentor: Dict[str, List[Tuple[int, int]]] = {}
    for key, cand in options.items():
        by_mentor.setdefault(cand.partner_id, []).append(key)

    for m_idx, (mentor_id, keys) in enumerate(sorted(by_mentor.items())):
        # (2) Mentor cap
        prob += (
            pulp.lpSum(x[key] for key in keys) <= max_sessions_per_mentor,
            f"Mentor_cap_{m_idx}",
        )

        # (3) No double booking of a mentor
        for a in range(len(keys)):
            for b in range(a + 1, len(keys)):
                ka, kb = keys[a], keys[b]
                if ka[0] == kb[0]:
                    continue   # same mentee, already covered by (1)
                if _windows_clash(options[ka], options[kb]):
                    prob += (
                        x[ka] + x[kb] <= 1,
                        f"No_clash_{m_idx}_{ka[0]}_{ka[1]}_{kb[0]}_{kb[1]}",
                    )

    # ---------- Solve ----------
    solver = pulp.PULP_CBC_CMD(msg=False)
    prob.solve(solver)
    status = pulp.LpStatus[prob.status]

    plan: Dict[str, MatchCandidate] = {}
    if status in ("Optimal", "Feasible"):
        for (i, j), var in x.items():
            val = var.varValue
            if val is not None and val > 0.5:
                plan[mentee_ids[i]] = options[(i, j)]

    return status, plan
