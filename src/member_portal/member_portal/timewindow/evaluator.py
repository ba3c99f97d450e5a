"""Feedback window and same-day booking cutoff.

Both checks run on the organization's clock (fixed UTC+05:30, no DST) at
minute granularity. Callers re-evaluate them; nothing here keeps state.
"""

from __future__ import annotations

from datetime import datetime, time

from ..common.datetime_utils import to_org_time
from ..core.constants import FEEDBACK_WINDOW_END, FEEDBACK_WINDOW_START, ORG_TZ, SAME_DAY_BOOKING_CUTOFF
from ..core.enums import FeedbackWindow


def _minute_of_day(t: time) -> int:
    return t.hour * 60 + t.minute


def classify(now: datetime, tz=ORG_TZ) -> FeedbackWindow:
    current = _minute_of_day(to_org_time(now, tz).time())
    if current < _minute_of_day(FEEDBACK_WINDOW_START):
        return FeedbackWindow.BEFORE
    if current <= _minute_of_day(FEEDBACK_WINDOW_END):
        return FeedbackWindow.OPEN
    return FeedbackWindow.CLOSED


def is_feedback_open(now: datetime, tz=ORG_TZ) -> bool:
    return classify(now, tz) == FeedbackWindow.OPEN


def same_day_cutoff_passed(now: datetime, tz=ORG_TZ) -> bool:
    current = _minute_of_day(to_org_time(now, tz).time())
    return current >= _minute_of_day(SAME_DAY_BOOKING_CUTOFF)


def window_message(window: FeedbackWindow) -> str:
    start = FEEDBACK_WINDOW_START.strftime("%I:%M %p").lstrip("0")
    end = FEEDBACK_WINDOW_END.strftime("%I:%M %p").lstrip("0")
    if window == FeedbackWindow.BEFORE:
        return f"Feedback submission opens at {start} IST today."
    if window == FeedbackWindow.CLOSED:
        return f"The feedback window ({start} - {end} IST) has closed for today."
    return f"Feedback is open until {end} IST."
