from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..sessions.model import SessionDraft
from .model import SessionInterest


class SessionInterestRepository(Protocol):
    def create(
        self,
        *,
        member_id: int,
        member_name: str,
        topic: str,
        session_type: str,
        preferred_date: date,
        description: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get(self, interest_id: int) -> Optional[SessionInterest]:
        raise NotImplementedError

    def list_all(self, *, limit: int = 200) -> Sequence[SessionInterest]:
        """Newest first."""

        raise NotImplementedError

    def list_for_member(self, member_id: int, *, limit: int = 200) -> Sequence[SessionInterest]:
        raise NotImplementedError

    def approve(self, interest_id: int, *, session: SessionDraft) -> Optional[int]:
        """Insert the session and flip the interest in one transaction.

        Returns the new session_id, or None if the interest is gone or no
        longer pending. Raises ConflictError if the date is taken.
        """

        raise NotImplementedError

    def create_approved(
        self,
        *,
        member_id: int,
        member_name: str,
        topic: str,
        session_type: str,
        description: Optional[str],
        session: SessionDraft,
    ) -> tuple[int, int]:
        """Insert an already-approved interest with its session; returns (interest_id, session_id)."""

        raise NotImplementedError

    def reschedule(self, interest_id: int, *, new_date: date, session_time: Optional[str] = None) -> bool:
        """Move an approved interest and its session to a new date in one transaction."""

        raise NotImplementedError

    def delete_pending(self, interest_id: int) -> bool:
        raise NotImplementedError

    def delete_cascade(self, interest_id: int) -> bool:
        """Delete feedback, session and interest in one transaction."""

        raise NotImplementedError
