# mentor_match/invitations.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union
from urllib.parse import quote
from zoneinfo import ZoneInfo

from .config import CALENDAR_EVENT_TITLE, CALENDAR_LOCATION, DAY_NAMES, TIMEZONE
from .models import MatchCandidate
from .weeks import date_for_weekday, local_today

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"


def to_24_hour(time_12h: str) -> str:
    """'9:30 AM' -> '09:30', '12:15 AM' -> '00:15', '1:00 PM' -> '13:00'."""
    try:
        clock, modifier = time_12h.strip().split(" ")
        hours_str, minutes = clock.split(":")
        hours = int(hours_str)
    except ValueError as e:
        raise ValueError(f"Expected 'H:MM AM/PM', got {time_12h!r}") from e

    modifier = modifier.upper()
    if (
        modifier not in ("AM", "PM")
        or not 1 <= hours <= 12
        or len(minutes) != 2
        or not minutes.isdigit()
        or int(minutes) >= 60
    ):
        raise ValueError(f"Expected 'H:MM AM/PM', got {time_12h!r}")

    if modifier == "AM" and hours == 12:
        hours = 0
    elif modifier == "PM" and hours != 12:
        hours += 12

    return f"{hours:02d}:{minutes}"


def to_12_hour(time_24h: str) -> str:
    """'13:00' -> '1:00 PM'."""
    hours, minutes = (int(x) for x in time_24h.split(":"))
    modifier = "AM" if hours < 12 else "PM"
    hours = hours % 12 or 12
    return f"{hours}:{minutes:02d} {modifier}"


def _day_index(day: Union[str, int]) -> int:
    if isinstance(day, int):
        idx = day
    elif day in DAY_NAMES:
        idx = DAY_NAMES.index(day)
    else:
        idx = int(day)
    if not 0 <= idx <= 6:
        raise ValueError(f"Day of week out of range: {day!r}")
    return idx


def next_weekday_date(day: Union[str, int], today: Optional[date] = None) -> date:
    """
    Next date falling on `day` (name or 0=Sunday index), strictly after
    today; the same weekday as today moves a full week ahead.
    """
    today = today or local_today()
    target = _day_index(day)
    current = (today.weekday() + 1) % 7   # Python Monday=0 -> Sunday=0

    days_to_add = target - current
    if days_to_add <= 0:
        days_to_add += 7
    return today + timedelta(days=days_to_add)


def _google_utc(d: date, hhmm: str, tz: str) -> str:
    hours, minutes = (int(x) for x in hhmm.split(":"))
    local = datetime(d.year, d.month, d.day, hours, minutes, tzinfo=ZoneInfo(tz))
    return local.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def google_calendar_link(
    mentor_email: str,
    mentee_email: str,
    day: Union[str, int],
    scheduled_time: str,
    today: Optional[date] = None,
    event_date: Optional[date] = None,
    tz: str = TIMEZONE,
) -> str:
    """
    'Add to Google Calendar' template URL for a session.

    scheduled_time: "9:30 AM - 10:00 AM". The event lands on `event_date`
    when given, else on the next occurrence of `day`.
    """
    start_str, end_str = (part.strip() for part in scheduled_time.split(" - "))
    event_date = event_date or next_weekday_date(day, today)

    start = _google_utc(event_date, to_24_hour(start_str), tz)
    end = _google_utc(event_date, to_24_hour(end_str), tz)

    details = (
        "Mentoring session\n"
        f"Mentor: {mentor_email}\n"
        f"Mentee: {mentee_email}\n\n"
        "Please coordinate with your partner to confirm meeting details."
    )

    return (
        f"{GOOGLE_CALENDAR_URL}?action=TEMPLATE"
        f"&text={quote(CALENDAR_EVENT_TITLE, safe='')}"
        f"&dates={start}/{end}"
        f"&details={quote(details, safe='')}"
        f"&location={quote(CALENDAR_LOCATION, safe='')}"
        f"&ctz={tz}"
    )


def session_summary(
    candidate: MatchCandidate,
    requester_email: str,
    requester_type: str,
) -> dict:
    """
    Invitation fields for a chosen candidate, from the requester's side:
    who mentors, who is mentored, and the human-readable date and time.
    """
    if requester_type == "mentor":
        mentor_email, mentee_email = requester_email, candidate.partner_email
    else:
        mentor_email, mentee_email = candidate.partner_email, requester_email

    session_date = date_for_weekday(candidate.week_key, candidate.day_of_week)
    scheduled_time = f"{to_12_hour(candidate.start_time)} - {to_12_hour(candidate.end_time)}"

    return {
        "mentor_email": mentor_email,
        "mentee_email": mentee_email,
        "day_of_week": DAY_NAMES[candidate.day_of_week],
        "scheduled_date": session_date.isoformat(),
        "scheduled_time": scheduled_time,
        "week_key": candidate.week_key,
        "calendar_link": google_calendar_link(
            mentor_email,
            mentee_email,
            candidate.day_of_week,
            scheduled_time,
            event_date=session_date,
        ),
    }
