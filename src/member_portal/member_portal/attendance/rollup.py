from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable

from ..common.datetime_utils import display_month, month_key
from .model import AttendanceRecord, MonthlyAttendance


def rollup(records: Iterable[AttendanceRecord], member_id: int) -> list[MonthlyAttendance]:
    """Per-month attendance for one member, newest month first.

    Working days are the distinct dates on which anyone's attendance was taken
    that month, not calendar weekdays.
    """
    working_days: dict[str, set[date]] = defaultdict(set)
    present_days: dict[str, set[date]] = defaultdict(set)

    for r in records:
        key = month_key(r.attendance_date)
        working_days[key].add(r.attendance_date)
        if int(r.member_id) == int(member_id) and r.is_present:
            present_days[key].add(r.attendance_date)

    out: list[MonthlyAttendance] = []
    for key in sorted(working_days, reverse=True):
        days = working_days[key]
        present = present_days.get(key, set())
        total = len(days)
        out.append(
            MonthlyAttendance(
                month_key=key,
                display_month=display_month(key),
                total_working_days=total,
                present_days=len(present),
                absent_dates=sorted(days - present, reverse=True),
                percentage=(len(present) / total * 100) if total else 0.0,
            )
        )
    return out
