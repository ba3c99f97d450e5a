from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc, org_today
from ..core.enums import FeedbackWindow
from ..timewindow.evaluator import classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockChange:
    """What changed between two ticks. Fields are None when unchanged."""

    window: Optional[FeedbackWindow] = None
    previous_window: Optional[FeedbackWindow] = None
    today: Optional[date] = None
    previous_today: Optional[date] = None

    @property
    def window_changed(self) -> bool:
        return self.window is not None

    @property
    def date_rolled_over(self) -> bool:
        return self.today is not None


Listener = Callable[[ClockChange], None]


class OrgClockMonitor:
    """Re-evaluates the feedback window and org date on every tick.

    The first tick only records the current values.
    """

    def __init__(self, clock: Callable[[], datetime] = now_utc):
        self._clock = clock
        self._window: Optional[FeedbackWindow] = None
        self._today: Optional[date] = None
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    @property
    def window(self) -> Optional[FeedbackWindow]:
        return self._window

    @property
    def today(self) -> Optional[date]:
        return self._today

    def tick(self, now: Optional[datetime] = None) -> Optional[ClockChange]:
        now = now or self._clock()
        window = classify(now)
        today = org_today(now)

        if self._window is None:
            self._window, self._today = window, today
            return None

        change = ClockChange(
            window=window if window != self._window else None,
            previous_window=self._window if window != self._window else None,
            today=today if today != self._today else None,
            previous_today=self._today if today != self._today else None,
        )
        self._window, self._today = window, today

        if not change.window_changed and not change.date_rolled_over:
            return None

        if change.date_rolled_over:
            logger.info("Organization date rolled over: %s -> %s", change.previous_today, change.today)
        if change.window_changed:
            logger.info("Feedback window changed: %s -> %s", change.previous_window.value, change.window.value)

        for listener in self._listeners:
            try:
                listener(change)
            except Exception:
                logger.exception("Clock listener %r failed", listener)
        return change
