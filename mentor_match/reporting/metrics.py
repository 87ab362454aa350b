# mentor_match/reporting/metrics.py
from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from ..storage.sqlite_store import SQLiteStore

SESSION_COLUMNS = [
    "id", "mentor_email", "mentee_email", "scheduled_date",
    "scheduled_time", "status", "created_at",
]


def platform_metrics(store: SQLiteStore, current_week_key: str) -> Dict[str, Any]:
    """
    Dashboard counters:
      users:    total / mentors / mentees / registered this week
      sessions: total / pending ("sent") / completed (= total - pending)
    """
    total_sessions = store.count("SELECT COUNT(*) FROM matches")
    pending = store.count("SELECT COUNT(*) FROM matches WHERE status = 'sent'")

    return {
        "users": {
            "total": store.count("SELECT COUNT(*) FROM users"),
            "mentors": store.count("SELECT COUNT(*) FROM users WHERE user_type = 'mentor'"),
            "mentees": store.count("SELECT COUNT(*) FROM users WHERE user_type = 'mentee'"),
            "this_week": store.count(
                "SELECT COUNT(*) FROM users WHERE week_key = ?", (current_week_key,)
            ),
        },
        "sessions": {
            "total": total_sessions,
            "pending": pending,
            "completed": total_sessions - pending,
        },
        "week_key": current_week_key,
    }


def sessions_frame(store: SQLiteStore, limit: int = 100) -> pd.DataFrame:
    rows = store.recent_matches(limit=limit)
    if not rows:
        return pd.DataFrame(columns=SESSION_COLUMNS)
    return pd.DataFrame(rows)[SESSION_COLUMNS]


def daily_sessions(store: SQLiteStore, days: int = 30) -> pd.DataFrame:
    """
    Invitations sent per day over the last `days` days, newest first.
    The window is measured on the database clock (UTC), same as created_at.
    """
    rows = store.query(
        "SELECT id, created_at FROM matches WHERE created_at >= datetime('now', ?)",
        (f"-{int(days)} days",),
    )
    if not rows:
        return pd.DataFrame(columns=["date", "sessions_count"])

    df = pd.DataFrame(rows)
    df["date"] = pd.to_datetime(df["created_at"]).dt.date.astype(str)
    out = (
        df.groupby("date")
        .size()
        .reset_index(name="sessions_count")
        .sort_values("date", ascending=False)
        .reset_index(drop=True)
    )
    return out


def registrations_by_week(store: SQLiteStore) -> pd.DataFrame:
    """Users per registration week and type (mentor / mentee columns)."""
    rows = store.query("SELECT week_key, user_type FROM users")
    if not rows:
        return pd.DataFrame(columns=["week_key", "mentor", "mentee"])

    df = pd.DataFrame(rows)
    table = pd.crosstab(df["week_key"], df["user_type"])
    for col in ("mentor", "mentee"):
        if col not in table.columns:
            table[col] = 0
    return table[["mentor", "mentee"]].reset_index()
