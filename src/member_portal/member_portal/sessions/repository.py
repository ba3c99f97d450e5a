from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def get_approved_on(self, session_date: date) -> Optional[Session]:
        """The approved session occupying a date, if any."""

        raise NotImplementedError

    def list_approved_on(self, session_date: date) -> Sequence[Session]:
        raise NotImplementedError

    def list_approved_between(self, start: date, end: date) -> Sequence[Session]:
        raise NotImplementedError

    def list_upcoming(self, *, after: date, limit: int) -> Sequence[Session]:
        raise NotImplementedError

    def list_approved(self, *, limit: int = 200) -> Sequence[Session]:
        """Newest first."""

        raise NotImplementedError
