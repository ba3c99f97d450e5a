from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Feedback


class FeedbackRepository(Protocol):
    def submitted_session_ids(self, *, member_id: int, feedback_date: date, session_ids: Sequence[int]) -> set[int]:
        raise NotImplementedError

    def exists(self, *, session_id: int, member_id: int, feedback_date: date) -> bool:
        raise NotImplementedError

    def create(
        self,
        *,
        session_id: int,
        member_id: int,
        rating: int,
        comments: Optional[str],
        feedback_date: date,
    ) -> int:
        """Insert one row; raises ValidationError on a duplicate for the same day."""

        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[Feedback]:
        """Newest first."""

        raise NotImplementedError

    def list_for_member(self, member_id: int) -> Sequence[Feedback]:
        raise NotImplementedError
