from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class Capability(str, Enum):
    """Admin actions on sessions and session interests."""

    APPROVE = "approve"
    REJECT = "reject"
    RESCHEDULE = "reschedule"
    CREATE = "create"
    DELETE = "delete"


class Role(str, Enum):
    """Member roles as stored in the members table."""

    MEMBER = "Member"
    SESSION_INCHARGE = "Session Incharge"
    VICE_PRESIDENT = "Vice President"
    PRESIDENT = "President"
    ADMINISTRATOR = "Administrator"

    @classmethod
    def from_label(cls, label: str) -> "Role":
        value = (label or "").strip()
        for role in cls:
            if role.value.lower() == value.lower():
                return role
        raise ValidationError(f"Unknown member role: {label!r}")

    @property
    def capabilities(self) -> frozenset[Capability]:
        return ROLE_CAPABILITIES[self]

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def is_admin(self) -> bool:
        return bool(self.capabilities)


_ALL = frozenset(Capability)

ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.MEMBER: frozenset(),
    Role.SESSION_INCHARGE: frozenset(),
    Role.VICE_PRESIDENT: _ALL,
    Role.PRESIDENT: _ALL,
    Role.ADMINISTRATOR: _ALL,
}


class FeedbackWindow(str, Enum):
    """Where the org-local clock sits relative to the daily feedback window."""

    BEFORE = "before"
    OPEN = "open"
    CLOSED = "closed"


class DayStatus(str, Enum):
    """Booking availability of a single calendar day."""

    PAST = "past"
    BLOCKED_WEEKDAY = "blocked_weekday"
    BOOKED = "booked"
    AVAILABLE = "available"


class InterestStatus(str, Enum):
    """Lifecycle of a session interest. REJECTED and DELETED rows are gone."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DELETED = "DELETED"


class InterestAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    RESCHEDULE = "reschedule"
    DELETE = "delete"


class FeedbackFormStatus(str, Enum):
    """What the feedback card shows a member right now."""

    NO_SESSIONS = "no_sessions"
    HANDLER_EXEMPT = "handler_exempt"
    ALL_SUBMITTED = "all_submitted"
    WINDOW_BEFORE = "window_before"
    WINDOW_CLOSED = "window_closed"
    OPEN = "open"
