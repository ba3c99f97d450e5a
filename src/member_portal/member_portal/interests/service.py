from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..booking_calendar.availability import day_status
from ..common.datetime_utils import now_utc, org_today
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_SESSION_TIME
from ..core.enums import Capability, DayStatus, InterestAction, InterestStatus, Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..members.repository import MemberRepository
from ..members.service import require_capability
from ..sessions.model import SessionDraft
from ..sessions.repository import SessionRepository
from ..sessions.service import normalize_session_time
from ..timewindow.evaluator import same_day_cutoff_passed
from .model import SessionInterest
from .repository import SessionInterestRepository
from .workflow import transition

logger = logging.getLogger(__name__)


class SessionInterestService:
    def __init__(
        self,
        interests: SessionInterestRepository,
        sessions: SessionRepository,
        members: MemberRepository,
    ):
        self._interests = interests
        self._sessions = sessions
        self._members = members

    def _get(self, interest_id: int) -> SessionInterest:
        interest = self._interests.get(int(interest_id))
        if not interest:
            raise NotFoundError("Session request not found")
        return interest

    def _ensure_date_free(self, session_date: date, *, exclude_session_id: Optional[int] = None) -> None:
        existing = self._sessions.get_approved_on(session_date)
        if existing and existing.session_id != exclude_session_id:
            logger.warning(
                "Date conflict on %s with session %s (%s)",
                session_date,
                existing.session_id,
                existing.title,
            )
            raise ConflictError(
                f'"{existing.title}" by {existing.handler} is already scheduled on {session_date:%Y-%m-%d}',
                topic=existing.title,
                handler=existing.handler,
                session_date=existing.session_date,
            )

    @staticmethod
    def _ensure_not_past(session_date: date, now: datetime) -> None:
        if session_date < org_today(now):
            raise ValidationError("Please select a date that is not in the past")

    def submit(
        self,
        *,
        member_id: int,
        topic: str,
        session_type: str,
        preferred_date: Optional[date],
        description: str = "",
        now: Optional[datetime] = None,
    ) -> int:
        now = now or now_utc()
        topic = require_non_empty(topic, "Topic")
        session_type = require_non_empty(session_type, "Session type")
        if preferred_date is None:
            raise ValidationError("Preferred date is required")

        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found. Please log in again.")

        booked = {preferred_date} if self._sessions.get_approved_on(preferred_date) else set()
        status = day_status(
            preferred_date,
            booked,
            org_today(now),
            same_day_cutoff_passed=same_day_cutoff_passed(now),
        )
        if status == DayStatus.PAST:
            if preferred_date == org_today(now):
                raise ValidationError("Cannot book a session for today after 12:30 PM IST. Please select a future date.")
            raise ValidationError("Please select a date that is not in the past")
        if status == DayStatus.BLOCKED_WEEKDAY:
            raise ValidationError("Sessions cannot be held on Sundays")
        if status == DayStatus.BOOKED:
            self._ensure_date_free(preferred_date)

        interest_id = self._interests.create(
            member_id=member.member_id,
            member_name=member.name,
            topic=topic,
            session_type=session_type,
            preferred_date=preferred_date,
            description=(description or "").strip() or None,
        )
        logger.info("Member %s requested session %s for %s", member.member_id, interest_id, preferred_date)
        return interest_id

    def approve(
        self,
        *,
        current_role: Role,
        interest_id: int,
        session_time: Optional[str] = None,
    ) -> int:
        require_capability(current_role, Capability.APPROVE)

        interest = self._get(interest_id)
        transition(interest.status, InterestAction.APPROVE)
        self._ensure_date_free(interest.preferred_date)

        draft = SessionDraft(
            title=interest.topic,
            session_date=interest.preferred_date,
            session_time=normalize_session_time(session_time) if session_time else DEFAULT_SESSION_TIME,
            session_type=interest.session_type,
            handler=interest.member_name,
            handler_id=interest.member_id,
            description=interest.description,
        )
        session_id = self._interests.approve(interest.interest_id, session=draft)
        if session_id is None:
            raise ValidationError("This request has already been processed")

        logger.info("Approved request %s as session %s on %s", interest.interest_id, session_id, draft.session_date)
        return session_id

    def reject(self, *, current_role: Role, interest_id: int) -> None:
        require_capability(current_role, Capability.REJECT)

        interest = self._get(interest_id)
        transition(interest.status, InterestAction.REJECT)

        if not self._interests.delete_pending(interest.interest_id):
            raise ValidationError("Failed to reject session")
        logger.info("Rejected request %s", interest.interest_id)

    def reschedule(
        self,
        *,
        current_role: Role,
        interest_id: int,
        new_date: date,
        session_time: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        require_capability(current_role, Capability.RESCHEDULE)
        now = now or now_utc()

        interest = self._get(interest_id)
        transition(interest.status, InterestAction.RESCHEDULE)
        self._ensure_not_past(new_date, now)
        self._ensure_date_free(new_date, exclude_session_id=interest.session_id)

        time_label = normalize_session_time(session_time) if session_time else None
        if not self._interests.reschedule(interest.interest_id, new_date=new_date, session_time=time_label):
            raise ValidationError("Failed to reschedule session")
        logger.info("Rescheduled request %s from %s to %s", interest.interest_id, interest.preferred_date, new_date)

    def delete(self, *, current_role: Role, interest_id: int) -> None:
        require_capability(current_role, Capability.DELETE)

        interest = self._get(interest_id)
        transition(interest.status, InterestAction.DELETE)

        if not self._interests.delete_cascade(interest.interest_id):
            raise ValidationError("Failed to delete session")
        logger.info("Deleted request %s and session %s", interest.interest_id, interest.session_id)

    def create_manual(
        self,
        *,
        current_role: Role,
        member_id: int,
        topic: str,
        session_type: str,
        session_date: Optional[date],
        description: str = "",
        session_time: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> tuple[int, int]:
        require_capability(current_role, Capability.CREATE)
        now = now or now_utc()

        topic = require_non_empty(topic, "Topic")
        session_type = require_non_empty(session_type, "Session type")
        if session_date is None:
            raise ValidationError("Session date is required")

        handler = self._members.get_by_id(int(member_id))
        if not handler:
            raise NotFoundError("Handler is not on the members list")

        self._ensure_not_past(session_date, now)
        self._ensure_date_free(session_date)

        description = (description or "").strip() or None
        draft = SessionDraft(
            title=topic,
            session_date=session_date,
            session_time=normalize_session_time(session_time) if session_time else DEFAULT_SESSION_TIME,
            session_type=session_type,
            handler=handler.name,
            handler_id=handler.member_id,
            description=description,
        )
        interest_id, session_id = self._interests.create_approved(
            member_id=handler.member_id,
            member_name=handler.name,
            topic=topic,
            session_type=session_type,
            description=description,
            session=draft,
        )
        logger.info("Created session %s on %s directly (request %s)", session_id, session_date, interest_id)
        return interest_id, session_id

    def list_for_admin(self) -> dict:
        rows = self._interests.list_all(limit=DEFAULT_LIST_LIMIT)
        return {
            "pending": [r for r in rows if r.status == InterestStatus.PENDING],
            "approved": [r for r in rows if r.status == InterestStatus.APPROVED],
        }

    def list_for_member(self, *, member_id: int) -> list[SessionInterest]:
        return list(self._interests.list_for_member(int(member_id), limit=DEFAULT_LIST_LIMIT))
