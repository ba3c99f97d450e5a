from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import InterestStatus


@dataclass(frozen=True)
class SessionInterest:
    """Domain entity: a member's request to hold a session."""

    interest_id: int
    member_id: int
    member_name: str
    topic: str
    session_type: str
    preferred_date: date
    description: Optional[str]
    is_approved: bool
    created_at: datetime
    session_id: Optional[int] = None

    @property
    def status(self) -> InterestStatus:
        return InterestStatus.APPROVED if self.is_approved else InterestStatus.PENDING
