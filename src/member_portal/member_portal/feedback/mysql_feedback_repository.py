from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Feedback
from .repository import FeedbackRepository

_COLUMNS = "feedback_id, session_id, member_id, rating, comments, feedback_date, created_at"


def _to_feedback(r: dict) -> Feedback:
    return Feedback(
        feedback_id=int(r["feedback_id"]),
        session_id=int(r["session_id"]),
        member_id=int(r["member_id"]) if r.get("member_id") is not None else None,
        rating=int(r["rating"]),
        comments=r.get("comments"),
        feedback_date=as_date(r["feedback_date"]),
        created_at=r["created_at"],
    )


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def submitted_session_ids(self, *, member_id: int, feedback_date: date, session_ids: Sequence[int]) -> set[int]:
        ids = [int(i) for i in session_ids]
        if not ids:
            return set()
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT session_id FROM session_feedback
                WHERE member_id=%s AND feedback_date=%s AND session_id IN ({placeholders})
                """,
                tuple([int(member_id), feedback_date] + ids),
            )
            return {int(r["session_id"]) for r in fetchall(cur)}

    def exists(self, *, session_id: int, member_id: int, feedback_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM session_feedback WHERE session_id=%s AND member_id=%s AND feedback_date=%s",
                (int(session_id), int(member_id), feedback_date),
            )
            return fetchone(cur) is not None

    def create(
        self,
        *,
        session_id: int,
        member_id: int,
        rating: int,
        comments: Optional[str],
        feedback_date: date,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO session_feedback(session_id, member_id, rating, comments, feedback_date)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(session_id), int(member_id), int(rating), comments, feedback_date),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ValidationError("You have already submitted feedback for this session.") from e
            raise

    def list_for_session(self, session_id: int) -> Sequence[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM session_feedback WHERE session_id=%s ORDER BY created_at DESC",
                (int(session_id),),
            )
            return [_to_feedback(r) for r in fetchall(cur)]

    def list_for_member(self, member_id: int) -> Sequence[Feedback]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM session_feedback WHERE member_id=%s ORDER BY created_at DESC",
                (int(member_id),),
            )
            return [_to_feedback(r) for r in fetchall(cur)]
