"""Session interest state machine.

PENDING --approve--> APPROVED --reschedule--> APPROVED
PENDING --reject--> REJECTED (row deleted)
APPROVED --delete--> DELETED (row, session and feedback deleted)
"""

from __future__ import annotations

from ..core.enums import InterestAction, InterestStatus
from ..core.exceptions import ValidationError

TRANSITIONS: dict[tuple[InterestStatus, InterestAction], InterestStatus] = {
    (InterestStatus.PENDING, InterestAction.APPROVE): InterestStatus.APPROVED,
    (InterestStatus.PENDING, InterestAction.REJECT): InterestStatus.REJECTED,
    (InterestStatus.APPROVED, InterestAction.RESCHEDULE): InterestStatus.APPROVED,
    (InterestStatus.APPROVED, InterestAction.DELETE): InterestStatus.DELETED,
}

_REFUSALS = {
    InterestAction.APPROVE: "This request has already been processed",
    InterestAction.REJECT: "Only pending requests can be rejected",
    InterestAction.RESCHEDULE: "Only approved sessions can be rescheduled",
    InterestAction.DELETE: "Only approved sessions can be deleted",
}


def transition(state: InterestStatus, action: InterestAction) -> InterestStatus:
    try:
        return TRANSITIONS[(state, action)]
    except KeyError:
        raise ValidationError(_REFUSALS[action])


def allowed_actions(state: InterestStatus) -> list[InterestAction]:
    return [action for (s, action) in TRANSITIONS if s == state]
