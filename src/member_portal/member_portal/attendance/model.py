from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.constants import GOOD_STANDING_PERCENTAGE


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member's presence on one day attendance was taken."""

    member_id: int
    attendance_date: date
    is_present: bool


@dataclass(frozen=True)
class MonthlyAttendance:
    """Read-model for the attendance card (one calendar month)."""

    month_key: str
    display_month: str
    total_working_days: int
    present_days: int
    absent_dates: list[date]
    percentage: float

    @property
    def good_standing(self) -> bool:
        return self.percentage >= GOOD_STANDING_PERCENTAGE

    @property
    def recent_absent_dates(self) -> list[date]:
        return self.absent_dates[:3]
