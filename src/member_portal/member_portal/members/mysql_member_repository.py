from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository

_COLUMNS = "member_id, name, email, department, role, password_hash, is_registered"


def _to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        name=r["name"],
        email=r["email"],
        department=r.get("department"),
        role=Role.from_label(r["role"]),
        password_hash=r.get("password_hash"),
        is_registered=bool(r.get("is_registered")),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (int(member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE LOWER(email)=LOWER(%s)", (email.strip(),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_names(self, member_ids: list[int]) -> dict[int, str]:
        ids = sorted({int(i) for i in member_ids})
        if not ids:
            return {}
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT member_id, name FROM members WHERE member_id IN ({placeholders})", tuple(ids))
            return {int(r["member_id"]): r["name"] for r in fetchall(cur)}

    def mark_registered(self, member_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET password_hash=%s, is_registered=1 WHERE member_id=%s AND is_registered=0",
                (password_hash, int(member_id)),
            )
            return cur.rowcount > 0

    def update_password(self, member_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE members SET password_hash=%s WHERE member_id=%s", (password_hash, int(member_id)))
            return cur.rowcount > 0
