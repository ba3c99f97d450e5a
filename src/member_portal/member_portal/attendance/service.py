from __future__ import annotations

from typing import Optional

from .model import MonthlyAttendance
from .repository import AttendanceRepository
from .rollup import rollup

NO_DATA = MonthlyAttendance(
    month_key="",
    display_month="No Data",
    total_working_days=0,
    present_days=0,
    absent_dates=[],
    percentage=0.0,
)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def monthly_summary(self, *, member_id: int) -> list[MonthlyAttendance]:
        return rollup(self._attendance.list_records(), int(member_id))

    def month(self, *, member_id: int, month_key: Optional[str] = None) -> MonthlyAttendance:
        """Selected month, or the most recent one when none is given."""
        months = self.monthly_summary(member_id=member_id)
        if not months:
            return NO_DATA
        if not month_key:
            return months[0]
        for m in months:
            if m.month_key == month_key:
                return m
        return NO_DATA
