from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import MONTH_NAMES, now_utc, org_today
from ..sessions.repository import SessionRepository
from ..timewindow.evaluator import same_day_cutoff_passed
from .availability import availability, can_go_back, month_grid, shift_month
from .model import MonthView


class BookingCalendarService:
    def __init__(self, sessions: SessionRepository):
        self._sessions = sessions

    def month_view(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> MonthView:
        now = now or now_utc()
        today = org_today(now)
        year, month = shift_month(year or today.year, month or today.month, offset, today=today)

        first = date(year, month, 1)
        last = date(year, month, calendar.monthrange(year, month)[1])
        booked = {s.session_date for s in self._sessions.list_approved_between(first, last)}

        cells = availability(
            month_grid(year, month),
            booked,
            today,
            same_day_cutoff_passed=same_day_cutoff_passed(now),
        )
        return MonthView(
            year=year,
            month=month,
            title=f"{MONTH_NAMES[month - 1]} {year}",
            cells=cells,
            can_go_back=can_go_back(year, month, today=today),
        )
