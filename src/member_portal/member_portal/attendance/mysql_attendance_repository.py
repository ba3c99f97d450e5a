from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_records(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if start is not None:
            clauses.append("attendance_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("attendance_date <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT member_id, attendance_date, is_present
                FROM attendance
                WHERE {where}
                ORDER BY attendance_date DESC
                """,
                tuple(params),
            )
            return [
                AttendanceRecord(
                    member_id=int(r["member_id"]),
                    attendance_date=as_date(r["attendance_date"]),
                    is_present=bool(r["is_present"]),
                )
                for r in fetchall(cur)
            ]
