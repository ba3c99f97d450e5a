from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Member:
    """Domain entity: a member on the organization's list.

    Note: plain data object, no DB access here.
    """

    member_id: int
    name: str
    email: str
    department: Optional[str]
    role: Role
    password_hash: Optional[str] = None
    is_registered: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin
