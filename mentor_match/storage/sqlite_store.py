# mentor_match/storage/sqlite_store.py
from __future__ import annotations

import sqlite3
import uuid
from typing import Dict, Iterable, List, Optional

from ..config import DB_PATH
from ..models import MatchRecord, PartnerSlot, TimeSlot, User

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT UNIQUE NOT NULL,
        user_type TEXT NOT NULL,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        week_key TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS availability (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        day_of_week INTEGER NOT NULL,
        start_time TEXT NOT NULL,
        end_time TEXT NOT NULL,
        week_key TEXT NOT NULL,
        FOREIGN KEY (user_id) REFERENCES users (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS abilities (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        ability TEXT NOT NULL,
        week_key TEXT NOT NULL,
        FOREIGN KEY (user_id) REFERENCES users (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS matches (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        mentor_id TEXT NOT NULL,
        mentee_id TEXT NOT NULL,
        scheduled_date TEXT NOT NULL,
        scheduled_time TEXT NOT NULL,
        status TEXT DEFAULT 'pending',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (mentor_id) REFERENCES users (id),
        FOREIGN KEY (mentee_id) REFERENCES users (id)
    )
    """,
]


def _row_to_slot(row: sqlite3.Row) -> TimeSlot:
    return TimeSlot(
        day_of_week=row["day_of_week"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        week_key=row["week_key"],
    )


def _row_to_user(row: Optional[sqlite3.Row]) -> Optional[User]:
    if row is None:
        return None
    return User(
        id=row["id"],
        email=row["email"],
        user_type=row["user_type"],
        week_key=row["week_key"],
    )


class SQLiteStore:
    """
    Users, availability, mentor abilities and sent invitations.

    One connection per instance. Writes commit per operation; a user's
    slots and abilities are replaced inside a single transaction.
    """

    def __init__(self, path: str = DB_PATH):
        self.path = path
        self.conn = sqlite3.connect(path)
        self.conn.row_factory = sqlite3.Row

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def init_schema(self):
        with self.conn:
            for ddl in SCHEMA:
                self.conn.execute(ddl)

    # ---------- users ----------

    def get_user(self, user_id: str) -> Optional[User]:
        row = self.conn.execute(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        return _row_to_user(row)

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self.conn.execute(
            "SELECT * FROM users WHERE email = ?", (email,)
        ).fetchone()
        return _row_to_user(row)

    def upsert_user(self, email: str, user_type: str, week_key: str) -> User:
        existing = self.get_user_by_email(email)
        with self.conn:
            if existing:
                self.conn.execute(
                    "UPDATE users SET user_type = ?, week_key = ? WHERE id = ?",
                    (user_type, week_key, existing.id),
                )
                user_id = existing.id
            else:
                user_id = uuid.uuid4().hex
                self.conn.execute(
                    "INSERT INTO users (id, email, user_type, week_key) VALUES (?, ?, ?, ?)",
                    (user_id, email, user_type, week_key),
                )
        return User(id=user_id, email=email, user_type=user_type, week_key=week_key)

    def replace_registration(
        self,
        user_id: str,
        slots: Iterable[TimeSlot],
        abilities: Iterable[str],
        week_key: str,
    ):
        """Delete-then-insert of a user's slots and abilities, all or nothing."""
        with self.conn:
            self._replace_availability(user_id, slots)
            self._replace_abilities(user_id, abilities, week_key)

    def _replace_availability(self, user_id, slots):
        self.conn.execute("DELETE FROM availability WHERE user_id = ?", (user_id,))
        self.conn.executemany(
            "INSERT INTO availability (user_id, day_of_week, start_time, end_time, week_key) "
            "VALUES (?, ?, ?, ?, ?)",
            [(user_id, s.day_of_week, s.start_time, s.end_time, s.week_key) for s in slots],
        )

    def _replace_abilities(self, user_id, abilities, week_key):
        self.conn.execute("DELETE FROM abilities WHERE user_id = ?", (user_id,))
        self.conn.executemany(
            "INSERT INTO abilities (user_id, ability, week_key) VALUES (?, ?, ?)",
            [(user_id, a, week_key) for a in abilities],
        )

    # ---------- availability ----------

    def availability_for_user(self, user_id: str, from_week_key: str) -> List[TimeSlot]:
        rows = self.conn.execute(
            "SELECT * FROM availability WHERE user_id = ? AND week_key >= ? "
            "ORDER BY week_key ASC, id ASC",
            (user_id, from_week_key),
        ).fetchall()
        return [_row_to_slot(r) for r in rows]

    def partner_slots(self, user_type: str, from_week_key: str) -> List[PartnerSlot]:
        """Slots of every `user_type` user in the current or a later week."""
        rows = self.conn.execute(
            """
            SELECT a.*, u.email
            FROM availability a
            JOIN users u ON a.user_id = u.id
            WHERE u.user_type = ? AND a.week_key >= ?
            ORDER BY a.id ASC
            """,
            (user_type, from_week_key),
        ).fetchall()
        return [
            PartnerSlot(user_id=r["user_id"], email=r["email"], slot=_row_to_slot(r))
            for r in rows
        ]

    def mentor_abilities(self, week_key: str) -> Dict[str, List[str]]:
        rows = self.conn.execute(
            """
            SELECT ab.user_id, ab.ability
            FROM abilities ab
            JOIN users u ON ab.user_id = u.id
            WHERE u.user_type = 'mentor' AND ab.week_key = ?
            ORDER BY ab.id ASC
            """,
            (week_key,),
        ).fetchall()

        by_user: Dict[str, List[str]] = {}
        for r in rows:
            by_user.setdefault(r["user_id"], []).append(r["ability"])
        return by_user

    # ---------- matches ----------

    def record_match(
        self,
        mentor_id: str,
        mentee_id: str,
        scheduled_date: str,
        scheduled_time: str,
        status: str = "sent",
    ) -> int:
        with self.conn:
            cur = self.conn.execute(
                "INSERT INTO matches (mentor_id, mentee_id, scheduled_date, scheduled_time, status) "
                "VALUES (?, ?, ?, ?, ?)",
                (mentor_id, mentee_id, scheduled_date, scheduled_time, status),
            )
        return cur.lastrowid

    def recent_matches(self, limit: int = 100) -> List[dict]:
        """Sent invitations joined with both emails, newest first."""
        rows = self.conn.execute(
            """
            SELECT m.*, mentor.email AS mentor_email, mentee.email AS mentee_email
            FROM matches m
            JOIN users mentor ON m.mentor_id = mentor.id
            JOIN users mentee ON m.mentee_id = mentee.id
            ORDER BY m.created_at DESC, m.id DESC
            LIMIT ?
            """,
            (limit,),
        ).fetchall()
        return [dict(r) for r in rows]

    def get_match(self, match_id: int) -> Optional[MatchRecord]:
        row = self.conn.execute(
            "SELECT * FROM matches WHERE id = ?", (match_id,)
        ).fetchone()
        if row is None:
            return None
        return MatchRecord(
            id=row["id"],
            mentor_id=row["mentor_id"],
            mentee_id=row["mentee_id"],
            scheduled_date=row["scheduled_date"],
            scheduled_time=row["scheduled_time"],
            status=row["status"],
            created_at=row["created_at"],
        )

    # ---------- housekeeping / counts ----------

    def clean_old_data(self, current_week_key: str) -> Dict[str, int]:
        """
        Drop availability and abilities of past weeks, then users left
        without any current or future availability.
        """
        with self.conn:
            slots = self.conn.execute(
                "DELETE FROM availability WHERE week_key < ?", (current_week_key,)
            ).rowcount
            abilities = self.conn.execute(
                "DELETE FROM abilities WHERE week_key < ?", (current_week_key,)
            ).rowcount
            users = self.conn.execute(
                """
                DELETE FROM users
                WHERE id NOT IN (
                    SELECT DISTINCT user_id FROM availability WHERE week_key >= ?
                )
                """,
                (current_week_key,),
            ).rowcount
        return {"availability": slots, "abilities": abilities, "users": users}

    def count(self, sql: str, params: tuple = ()) -> int:
        return self.conn.execute(sql, params).fetchone()[0]

    def query(self, sql: str, params: tuple = ()) -> List[dict]:
        return [dict(r) for r in self.conn.execute(sql, params).fetchall()]
