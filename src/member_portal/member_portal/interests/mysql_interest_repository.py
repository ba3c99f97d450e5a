from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, is_duplicate_key
from ..sessions.model import SessionDraft
from .model import SessionInterest
from .repository import SessionInterestRepository

_COLUMNS = (
    "interest_id, member_id, member_name, topic, session_type, preferred_date, "
    "description, is_approved, session_id, created_at"
)


def _to_interest(r: dict) -> SessionInterest:
    return SessionInterest(
        interest_id=int(r["interest_id"]),
        member_id=int(r["member_id"]),
        member_name=r["member_name"],
        topic=r["topic"],
        session_type=r["session_type"],
        preferred_date=as_date(r["preferred_date"]),
        description=r.get("description"),
        is_approved=bool(r.get("is_approved")),
        session_id=int(r["session_id"]) if r.get("session_id") is not None else None,
        created_at=r["created_at"],
    )


def _insert_session(cur, session: SessionDraft) -> int:
    cur.execute(
        """
        INSERT INTO sessions(title, session_date, session_time, session_type, handler, handler_id, description, is_approved)
        VALUES(%s,%s,%s,%s,%s,%s,%s,1)
        """,
        (
            session.title,
            session.session_date,
            session.session_time,
            session.session_type,
            session.handler,
            session.handler_id,
            session.description,
        ),
    )
    return int(cur.lastrowid)


def _date_taken(session_date: date) -> ConflictError:
    return ConflictError(
        f"Another session was approved for {session_date:%Y-%m-%d} at the same time",
        session_date=session_date,
    )


class MySQLSessionInterestRepository(SessionInterestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        member_id: int,
        member_name: str,
        topic: str,
        session_type: str,
        preferred_date: date,
        description: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO session_interests(member_id, member_name, topic, session_type, preferred_date, description)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(member_id), member_name, topic, session_type, preferred_date, description),
            )
            return int(cur.lastrowid)

    def get(self, interest_id: int) -> Optional[SessionInterest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM session_interests WHERE interest_id=%s", (int(interest_id),))
            r = fetchone(cur)
            return _to_interest(r) if r else None

    def list_all(self, *, limit: int = 200) -> Sequence[SessionInterest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM session_interests ORDER BY created_at DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_interest(r) for r in fetchall(cur)]

    def list_for_member(self, member_id: int, *, limit: int = 200) -> Sequence[SessionInterest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM session_interests
                WHERE member_id=%s
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(member_id), int(limit)),
            )
            return [_to_interest(r) for r in fetchall(cur)]

    def approve(self, interest_id: int, *, session: SessionDraft) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT is_approved FROM session_interests WHERE interest_id=%s FOR UPDATE",
                    (int(interest_id),),
                )
                r = fetchone(cur)
                if not r or r["is_approved"]:
                    return None

                session_id = _insert_session(cur, session)
                cur.execute(
                    "UPDATE session_interests SET is_approved=1, session_id=%s WHERE interest_id=%s",
                    (session_id, int(interest_id)),
                )
                return session_id
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise _date_taken(session.session_date) from e
            raise

    def create_approved(
        self,
        *,
        member_id: int,
        member_name: str,
        topic: str,
        session_type: str,
        description: Optional[str],
        session: SessionDraft,
    ) -> tuple[int, int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                session_id = _insert_session(cur, session)
                cur.execute(
                    """
                    INSERT INTO session_interests(
                        member_id, member_name, topic, session_type, preferred_date, description, is_approved, session_id
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,1,%s)
                    """,
                    (int(member_id), member_name, topic, session_type, session.session_date, description, session_id),
                )
                return int(cur.lastrowid), session_id
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise _date_taken(session.session_date) from e
            raise

    def reschedule(self, interest_id: int, *, new_date: date, session_time: Optional[str] = None) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT session_id FROM session_interests WHERE interest_id=%s AND is_approved=1 FOR UPDATE",
                    (int(interest_id),),
                )
                r = fetchone(cur)
                if not r:
                    return False

                cur.execute(
                    "UPDATE session_interests SET preferred_date=%s WHERE interest_id=%s",
                    (new_date, int(interest_id)),
                )
                if r.get("session_id") is not None:
                    if session_time:
                        cur.execute(
                            "UPDATE sessions SET session_date=%s, session_time=%s WHERE session_id=%s",
                            (new_date, session_time, int(r["session_id"])),
                        )
                    else:
                        cur.execute(
                            "UPDATE sessions SET session_date=%s WHERE session_id=%s",
                            (new_date, int(r["session_id"])),
                        )
                return True
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise _date_taken(new_date) from e
            raise

    def delete_pending(self, interest_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM session_interests WHERE interest_id=%s AND is_approved=0",
                (int(interest_id),),
            )
            return cur.rowcount > 0

    def delete_cascade(self, interest_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT session_id FROM session_interests WHERE interest_id=%s FOR UPDATE",
                (int(interest_id),),
            )
            r = fetchone(cur)
            if not r:
                return False

            session_id = r.get("session_id")
            if session_id is not None:
                cur.execute("DELETE FROM session_feedback WHERE session_id=%s", (int(session_id),))
                cur.execute("DELETE FROM sessions WHERE session_id=%s", (int(session_id),))

            cur.execute("DELETE FROM session_interests WHERE interest_id=%s", (int(interest_id),))
            return cur.rowcount > 0
