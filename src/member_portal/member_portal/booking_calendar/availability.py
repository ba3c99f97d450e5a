from __future__ import annotations

import calendar
from datetime import date
from typing import AbstractSet, Optional, Sequence

from ..core.constants import EXCLUDED_WEEKDAY
from ..core.enums import DayStatus
from .model import DayAvailability


def month_grid(year: int, month: int) -> list[Optional[date]]:
    """Day cells for a Sunday-first 7-column layout, left-padded with None."""
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # monthrange() counts Monday as 0; the grid starts on Sunday
    padding = (first_weekday + 1) % 7
    cells: list[Optional[date]] = [None] * padding
    cells.extend(date(year, month, d) for d in range(1, days_in_month + 1))
    return cells


def day_status(
    day: date,
    booked_dates: AbstractSet[date],
    today: date,
    *,
    same_day_cutoff_passed: bool = False,
) -> DayStatus:
    if day < today:
        return DayStatus.PAST
    if day == today and same_day_cutoff_passed:
        return DayStatus.PAST
    if day.weekday() == EXCLUDED_WEEKDAY:
        return DayStatus.BLOCKED_WEEKDAY
    if day in booked_dates:
        return DayStatus.BOOKED
    return DayStatus.AVAILABLE


def availability(
    grid: Sequence[Optional[date]],
    booked_dates: AbstractSet[date],
    today: date,
    *,
    same_day_cutoff_passed: bool = False,
) -> list[Optional[DayAvailability]]:
    out: list[Optional[DayAvailability]] = []
    for cell in grid:
        if cell is None:
            out.append(None)
            continue
        status = day_status(cell, booked_dates, today, same_day_cutoff_passed=same_day_cutoff_passed)
        out.append(DayAvailability(day=cell, status=status))
    return out


def shift_month(year: int, month: int, offset: int, *, today: date) -> tuple[int, int]:
    """Move the visible month by offset, never earlier than today's month."""
    index = year * 12 + (month - 1) + int(offset)
    floor = today.year * 12 + (today.month - 1)
    index = max(index, floor)
    return index // 12, index % 12 + 1


def can_go_back(year: int, month: int, *, today: date) -> bool:
    return (year, month) > (today.year, today.month)
