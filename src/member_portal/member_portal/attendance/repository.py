from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_records(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[AttendanceRecord]:
        """Rows for every member; working days are derived from all of them."""

        raise NotImplementedError
