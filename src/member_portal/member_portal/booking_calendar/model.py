from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DayStatus


@dataclass(frozen=True)
class DayAvailability:
    day: date
    status: DayStatus

    @property
    def selectable(self) -> bool:
        return self.status == DayStatus.AVAILABLE


@dataclass(frozen=True)
class MonthView:
    """Read-model for the booking calendar page."""

    year: int
    month: int
    title: str
    cells: list[Optional[DayAvailability]]
    can_go_back: bool
