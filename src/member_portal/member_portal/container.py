from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .booking_calendar.service import BookingCalendarService
from .database.connection import DBConfig, DatabaseConnection
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.service import FeedbackService
from .interests.mysql_interest_repository import MySQLSessionInterestRepository
from .interests.service import SessionInterestService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.service import AuthService, MemberService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    member_service: MemberService
    session_service: SessionService
    interest_service: SessionInterestService
    feedback_service: FeedbackService
    attendance_service: AttendanceService
    calendar_service: BookingCalendarService


def build_services(*, members, sessions, interests, feedback, attendance) -> Container:
    """Wire services over any set of repositories (MySQL in the app, in-memory in tests)."""
    return Container(
        auth_service=AuthService(members),
        member_service=MemberService(members),
        session_service=SessionService(sessions, feedback),
        interest_service=SessionInterestService(interests, sessions, members),
        feedback_service=FeedbackService(feedback, sessions, members, interests),
        attendance_service=AttendanceService(attendance),
        calendar_service=BookingCalendarService(sessions),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        members=MySQLMemberRepository(conn),
        sessions=MySQLSessionRepository(conn),
        interests=MySQLSessionInterestRepository(conn),
        feedback=MySQLFeedbackRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
    )
