from __future__ import annotations

from typing import Optional, Protocol

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for members.

    Note: services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Member]:
        raise NotImplementedError

    def get_names(self, member_ids: list[int]) -> dict[int, str]:
        raise NotImplementedError

    def mark_registered(self, member_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def update_password(self, member_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError
