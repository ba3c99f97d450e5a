from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import Session
from .repository import SessionRepository

SESSION_COLUMNS = (
    "session_id, title, session_date, session_time, session_type, handler, handler_id, description, is_approved"
)


def to_session(r: dict) -> Session:
    return Session(
        session_id=int(r["session_id"]),
        title=r["title"],
        session_date=as_date(r["session_date"]),
        session_time=r.get("session_time") or "",
        session_type=r["session_type"],
        handler=r["handler"],
        handler_id=int(r["handler_id"]) if r.get("handler_id") is not None else None,
        description=r.get("description"),
        is_approved=bool(r.get("is_approved")),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {SESSION_COLUMNS} FROM sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return to_session(r) if r else None

    def get_approved_on(self, session_date: date) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions WHERE session_date=%s AND is_approved=1 LIMIT 1",
                (session_date,),
            )
            r = fetchone(cur)
            return to_session(r) if r else None

    def list_approved_on(self, session_date: date) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions WHERE session_date=%s AND is_approved=1",
                (session_date,),
            )
            return [to_session(r) for r in fetchall(cur)]

    def list_approved_between(self, start: date, end: date) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {SESSION_COLUMNS} FROM sessions
                WHERE session_date BETWEEN %s AND %s AND is_approved=1
                ORDER BY session_date ASC
                """,
                (start, end),
            )
            return [to_session(r) for r in fetchall(cur)]

    def list_upcoming(self, *, after: date, limit: int) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {SESSION_COLUMNS} FROM sessions
                WHERE session_date > %s AND is_approved=1
                ORDER BY session_date ASC
                LIMIT %s
                """,
                (after, int(limit)),
            )
            return [to_session(r) for r in fetchall(cur)]

    def list_approved(self, *, limit: int = 200) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {SESSION_COLUMNS} FROM sessions WHERE is_approved=1 ORDER BY session_date DESC LIMIT %s",
                (int(limit),),
            )
            return [to_session(r) for r in fetchall(cur)]
