# mentor_match/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import re

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class UserNotFoundError(LookupError):
    """Raised when a match request names a user that is not registered."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id!r}")
        self.user_id = user_id


class InvalidSlotError(ValueError):
    pass


class RegistrationError(ValueError):
    pass


class PastWeekError(RegistrationError):
    pass


@dataclass(frozen=True)
class TimeSlot:
    """
    One availability window as entered in the weekly grid.

    day_of_week: 0 = Sunday ... 6 = Saturday
    start_time / end_time: "HH:MM" (24h), half-open [start, end)
    week_key: ISO date of the Monday anchoring the week
    """

    day_of_week: int
    start_time: str
    end_time: str
    week_key: str

    def __post_init__(self):
        if (
            isinstance(self.day_of_week, bool)
            or not isinstance(self.day_of_week, int)
            or not 0 <= self.day_of_week <= 6
        ):
            raise InvalidSlotError(
                f"day_of_week must be an integer 0-6, got {self.day_of_week!r}"
            )
        for name in ("start_time", "end_time"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _TIME_RE.match(value):
                raise InvalidSlotError(f"{name} must be 'HH:MM', got {value!r}")
        # zero-padded HH:MM compares correctly as text
        if self.start_time >= self.end_time:
            raise InvalidSlotError(
                f"start_time {self.start_time} must be before end_time {self.end_time}"
            )
        if not self.week_key:
            raise InvalidSlotError("week_key is required")

    @classmethod
    def from_dict(cls, data: dict, default_week_key: Optional[str] = None) -> "TimeSlot":
        """Build a slot from the camelCase payload used by the availability grid."""
        return cls(
            day_of_week=data["dayOfWeek"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            week_key=data.get("weekKey") or default_week_key,
        )

    def as_dict(self):
        return {
            "dayOfWeek": self.day_of_week,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "weekKey": self.week_key,
        }


@dataclass(frozen=True)
class PartnerSlot:
    user_id: str
    email: str
    slot: TimeSlot


@dataclass
class User:
    id: str
    email: str
    user_type: str   # "mentor" / "mentee"
    week_key: str

    @property
    def opposite_type(self) -> str:
        return "mentee" if self.user_type == "mentor" else "mentor"


@dataclass
class MatchCandidate:
    partner_id: str
    partner_email: str
    day_of_week: int
    week_key: str
    start_time: str
    end_time: str
    duration: int    # minutes
    abilities: List[str] = field(default_factory=list)

    @property
    def window_key(self):
        return (self.day_of_week, self.start_time, self.end_time)

    def as_dict(self):
        return {
            "partnerId": self.partner_id,
            "partnerEmail": self.partner_email,
            "dayOfWeek": self.day_of_week,
            "weekKey": self.week_key,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration,
            "abilities": list(self.abilities),
        }


@dataclass
class MatchRecord:
    id: int
    mentor_id: str
    mentee_id: str
    scheduled_date: str
    scheduled_time: str
    status: str = "sent"
    created_at: Optional[str] = None
