from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Session:
    """Domain entity: a scheduled talk/workshop with a single handler."""

    session_id: int
    title: str
    session_date: date
    session_time: str
    session_type: str
    handler: str
    handler_id: Optional[int]
    description: Optional[str] = None
    is_approved: bool = True

    def is_handled_by(self, member_id: int) -> bool:
        return self.handler_id is not None and int(self.handler_id) == int(member_id)


@dataclass(frozen=True)
class SessionDraft:
    """Fields for a session row that does not exist yet."""

    title: str
    session_date: date
    session_time: str
    session_type: str
    handler: str
    handler_id: Optional[int]
    description: Optional[str] = None
