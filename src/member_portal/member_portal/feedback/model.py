from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import FeedbackFormStatus
from ..sessions.model import Session


@dataclass(frozen=True)
class Feedback:
    """Domain entity: one member's rating of one session on one day."""

    feedback_id: int
    session_id: int
    member_id: Optional[int]
    rating: int
    comments: Optional[str]
    feedback_date: date
    created_at: datetime


@dataclass(frozen=True)
class FeedbackSummary:
    average: float
    count: int


@dataclass(frozen=True)
class FeedbackObligations:
    """A member's today-sessions split by what is still owed."""

    handled: list[Session]
    submitted: list[Session]
    pending: list[Session]

    @property
    def total(self) -> int:
        return len(self.handled) + len(self.submitted) + len(self.pending)

    @property
    def handles_all(self) -> bool:
        return bool(self.handled) and len(self.handled) == self.total

    @property
    def handles_some(self) -> bool:
        return bool(self.handled) and not self.handles_all

    @property
    def all_submitted(self) -> bool:
        return self.total > 0 and not self.pending and not self.handles_all


@dataclass(frozen=True)
class FeedbackFormState:
    status: FeedbackFormStatus
    message: str
    sessions: list[Session] = field(default_factory=list)
    handled: list[Session] = field(default_factory=list)


@dataclass(frozen=True)
class FeedbackEntry:
    """Read-model: feedback row with the rater's display name."""

    feedback_id: int
    member_name: str
    rating: int
    comments: str
    feedback_date: date
    created_at: datetime


@dataclass(frozen=True)
class SessionFeedbackReport:
    session: Optional[Session]
    entries: list[FeedbackEntry]
    summary: FeedbackSummary
