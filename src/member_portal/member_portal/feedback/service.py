from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc, org_today
from ..common.validators import require_rating
from ..core.enums import FeedbackFormStatus, FeedbackWindow, InterestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..interests.repository import SessionInterestRepository
from ..members.repository import MemberRepository
from ..sessions.repository import SessionRepository
from ..sessions.service import SessionService
from ..timewindow.evaluator import classify, window_message
from .aggregation import aggregate, partition
from .model import FeedbackEntry, FeedbackFormState, SessionFeedbackReport
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


class FeedbackService:
    def __init__(
        self,
        feedback: FeedbackRepository,
        sessions: SessionRepository,
        members: MemberRepository,
        interests: SessionInterestRepository,
    ):
        self._feedback = feedback
        self._sessions = sessions
        self._members = members
        self._interests = interests
        self._listing = SessionService(sessions, feedback)

    def form_state(self, *, member_id: int, now: Optional[datetime] = None) -> FeedbackFormState:
        """Decide what the feedback card shows; the handler exemption wins over the clock."""
        now = now or now_utc()
        today_sessions = self._listing.today_sessions(now=now)
        if not today_sessions:
            return FeedbackFormState(FeedbackFormStatus.NO_SESSIONS, "There are no sessions scheduled for today.")

        obligations = partition(member_id, today_sessions, set())
        if obligations.handles_all:
            titles = ", ".join(s.title for s in obligations.handled)
            return FeedbackFormState(
                FeedbackFormStatus.HANDLER_EXEMPT,
                f"You are handling today's session: {titles}. Handlers don't submit feedback.",
                handled=obligations.handled,
            )

        window = classify(now)
        if window != FeedbackWindow.OPEN:
            status = FeedbackFormStatus.WINDOW_BEFORE if window == FeedbackWindow.BEFORE else FeedbackFormStatus.WINDOW_CLOSED
            return FeedbackFormState(status, window_message(window), handled=obligations.handled)

        submitted = self._feedback.submitted_session_ids(
            member_id=int(member_id),
            feedback_date=org_today(now),
            session_ids=[s.session_id for s in today_sessions],
        )
        obligations = partition(member_id, today_sessions, submitted)
        if obligations.all_submitted:
            return FeedbackFormState(
                FeedbackFormStatus.ALL_SUBMITTED,
                "You have submitted feedback for all sessions you attended today.",
                handled=obligations.handled,
            )

        return FeedbackFormState(
            FeedbackFormStatus.OPEN,
            window_message(window),
            sessions=obligations.pending,
            handled=obligations.handled,
        )

    def submit(
        self,
        *,
        member_id: int,
        session_id: Optional[int],
        rating,
        comments: str = "",
        now: Optional[datetime] = None,
    ) -> int:
        now = now or now_utc()
        if not session_id:
            raise ValidationError("Please select a session")
        rating = require_rating(rating)

        window = classify(now)
        if window != FeedbackWindow.OPEN:
            raise ValidationError(window_message(window))

        today = org_today(now)
        session = self._sessions.get_by_id(int(session_id))
        if not session or not session.is_approved or session.session_date != today:
            raise ValidationError("Feedback can only be given for today's sessions")
        if session.is_handled_by(member_id):
            raise ValidationError("As the session handler, you don't need to submit feedback")

        if self._feedback.exists(session_id=session.session_id, member_id=int(member_id), feedback_date=today):
            raise ValidationError("You have already submitted feedback for this session.")

        feedback_id = self._feedback.create(
            session_id=session.session_id,
            member_id=int(member_id),
            rating=rating,
            comments=(comments or "").strip() or None,
            feedback_date=today,
        )
        logger.info("Member %s rated session %s (%s)", member_id, session.session_id, rating)
        return feedback_id

    def session_feedback(self, *, session_id: int) -> SessionFeedbackReport:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Session not found")

        rows = self._feedback.list_for_session(session.session_id)
        names = self._members.get_names([r.member_id for r in rows if r.member_id is not None])
        entries = [
            FeedbackEntry(
                feedback_id=r.feedback_id,
                member_name=names.get(r.member_id, ANONYMOUS) if r.member_id is not None else ANONYMOUS,
                rating=r.rating,
                comments=r.comments or "",
                feedback_date=r.feedback_date,
                created_at=r.created_at,
            )
            for r in rows
        ]
        return SessionFeedbackReport(session=session, entries=entries, summary=aggregate(rows))

    def interest_feedback(self, *, interest_id: int) -> SessionFeedbackReport:
        interest = self._interests.get(int(interest_id))
        if not interest:
            raise NotFoundError("Session request not found")
        if interest.status != InterestStatus.APPROVED or interest.session_id is None:
            return SessionFeedbackReport(session=None, entries=[], summary=aggregate([]))
        return self.session_feedback(session_id=interest.session_id)

    def admin_overview(self) -> list[dict]:
        """Approved requests with their session feedback and average rating."""
        out: list[dict] = []
        for interest in self._interests.list_all():
            if interest.status != InterestStatus.APPROVED:
                continue
            rows = list(self._feedback.list_for_session(interest.session_id)) if interest.session_id is not None else []
            out.append({"interest": interest, "feedback": rows, "summary": aggregate(rows)})
        return out
