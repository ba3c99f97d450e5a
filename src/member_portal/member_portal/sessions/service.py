from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc, org_today
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_UPCOMING_LIMIT
from ..core.exceptions import ValidationError
from ..feedback.aggregation import aggregate
from ..feedback.model import Feedback, FeedbackSummary
from ..feedback.repository import FeedbackRepository
from .model import Session
from .repository import SessionRepository

_TWELVE_HOUR = re.compile(r"^(0?[1-9]|1[0-2]):[0-5][0-9] (AM|PM)$", re.IGNORECASE)


def parse_session_time(value: str) -> Optional[time]:
    v = (value or "").strip().upper()
    for fmt in ("%I:%M %p", "%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    return None


def normalize_session_time(value: str) -> str:
    """Storage form of a session time, e.g. '13:00' -> '01:00 PM'."""
    t = parse_session_time(value)
    if t is None:
        raise ValidationError("Invalid time (HH:MM or HH:MM AM/PM)")
    return t.strftime("%I:%M %p")


def format_session_time(value: str) -> str:
    """Display form: '13:00' -> '1:00 PM'. Unparseable input is returned as-is."""
    if _TWELVE_HOUR.match((value or "").strip()):
        return value.strip()
    t = parse_session_time(value)
    if t is None:
        return value
    hours12 = t.hour % 12 or 12
    period = "PM" if t.hour >= 12 else "AM"
    return f"{hours12}:{t.minute:02d} {period}"


def _time_sort_key(s: Session):
    t = parse_session_time(s.session_time)
    return (s.session_date, t is None, t or time.min)


@dataclass(frozen=True)
class SessionBoard:
    today: date
    today_sessions: list[Session]
    upcoming_sessions: list[Session]


@dataclass(frozen=True)
class HistoryEntry:
    session: Session
    summary: FeedbackSummary
    feedback: list[Feedback]
    own_feedback: Optional[Feedback]
    handled_by_member: bool


@dataclass(frozen=True)
class SessionHistory:
    past: list[HistoryEntry]
    upcoming: list[HistoryEntry]


class SessionService:
    def __init__(self, sessions: SessionRepository, feedback: FeedbackRepository):
        self._sessions = sessions
        self._feedback = feedback

    def today_sessions(self, *, now: Optional[datetime] = None) -> list[Session]:
        today = org_today(now or now_utc())
        return sorted(self._sessions.list_approved_on(today), key=_time_sort_key)

    def today_and_upcoming(self, *, now: Optional[datetime] = None) -> SessionBoard:
        now = now or now_utc()
        today = org_today(now)
        upcoming = sorted(self._sessions.list_upcoming(after=today, limit=DEFAULT_UPCOMING_LIMIT), key=_time_sort_key)
        return SessionBoard(today=today, today_sessions=self.today_sessions(now=now), upcoming_sessions=upcoming)

    def history(self, *, member_id: int, now: Optional[datetime] = None) -> SessionHistory:
        """Sessions the member handled or rated, split into past and upcoming."""
        today = org_today(now or now_utc())
        own: dict[int, Feedback] = {}
        for f in self._feedback.list_for_member(int(member_id)):
            own.setdefault(f.session_id, f)

        past: list[HistoryEntry] = []
        upcoming: list[HistoryEntry] = []
        for s in self._sessions.list_approved(limit=DEFAULT_LIST_LIMIT):
            handled = s.is_handled_by(member_id)
            if not handled and s.session_id not in own:
                continue

            rows: Sequence[Feedback] = self._feedback.list_for_session(s.session_id)
            entry = HistoryEntry(
                session=s,
                summary=aggregate(rows),
                feedback=list(rows),
                own_feedback=own.get(s.session_id),
                handled_by_member=handled,
            )
            (past if s.session_date < today else upcoming).append(entry)

        return SessionHistory(past=past, upcoming=upcoming)
