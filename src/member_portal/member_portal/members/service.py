from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_matching, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Capability, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionMember:
    """What we store into the Flask session after login."""

    member_id: int
    name: str
    email: str
    role: Role


def require_capability(role: Role, capability: Capability) -> None:
    if not role.can(capability):
        raise AuthorizationError("You do not have admin privileges")


class AuthService:
    """Use cases: log in, sign up (members list only), change password."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def _listed_member(self, email: str) -> Member:
        email = require_non_empty(email, "Email")
        member = self._members.get_by_email(email)
        if not member:
            raise AuthorizationError("Access denied: this email is not on the members list")
        return member

    @staticmethod
    def _password_ok(member: Member, password: str) -> bool:
        if not member.password_hash:
            return False
        try:
            return check_password_hash(member.password_hash, password or "")
        except ValueError:
            # unknown hash method stored in the row
            return False

    def authenticate(self, email: str, password: str) -> SessionMember:
        member = self._listed_member(email)
        if not member.is_registered or not self._password_ok(member, password):
            raise AuthenticationError("Invalid email or password")

        logger.info("Member %s logged in", member.member_id)
        return SessionMember(member_id=member.member_id, name=member.name, email=member.email, role=member.role)

    def register(self, email: str, password: str, confirm_password: str) -> SessionMember:
        require_matching(password, confirm_password, "Password")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        member = self._listed_member(email)
        if member.is_registered:
            raise ValidationError("An account with this email already exists. Please log in instead.")

        if not self._members.mark_registered(member.member_id, password_hash=generate_password_hash(password)):
            raise ValidationError("An account with this email already exists. Please log in instead.")

        logger.info("Member %s registered an account", member.member_id)
        return SessionMember(member_id=member.member_id, name=member.name, email=member.email, role=member.role)

    def change_password(self, member_id: int, *, current_password: str, new_password: str, confirm_password: str) -> None:
        require_matching(new_password, confirm_password, "New password")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found")
        if not self._password_ok(member, current_password):
            raise AuthenticationError("Current password is incorrect")

        if not self._members.update_password(member.member_id, password_hash=generate_password_hash(new_password)):
            raise ValidationError("Password update failed")
        logger.info("Member %s changed password", member.member_id)


class MemberService:
    def __init__(self, members: MemberRepository):
        self._members = members

    def get(self, member_id: int) -> Member:
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Could not fetch member data")
        return member

    def get_by_email(self, email: str) -> Optional[Member]:
        return self._members.get_by_email(email)

    def require(self, member_id: int, capability: Capability) -> Member:
        member = self.get(member_id)
        require_capability(member.role, capability)
        return member
