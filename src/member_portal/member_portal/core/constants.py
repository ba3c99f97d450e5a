"""Organizational constants.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time, timedelta, timezone

ORG_UTC_OFFSET = timedelta(hours=5, minutes=30)
ORG_TZ = timezone(ORG_UTC_OFFSET, name="IST")

FEEDBACK_WINDOW_START = time(13, 30)
FEEDBACK_WINDOW_END = time(23, 59)

SAME_DAY_BOOKING_CUTOFF = time(12, 30)

DEFAULT_SESSION_TIME = "01:00 PM"

# date.weekday() numbering (Monday=0)
EXCLUDED_WEEKDAY = 6

GOOD_STANDING_PERCENTAGE = 75.0

DEFAULT_UPCOMING_LIMIT = 5
DEFAULT_LIST_LIMIT = 200
MIN_PASSWORD_LENGTH = 6

MIN_RATING = 1
MAX_RATING = 5

RECHECK_INTERVAL_SECONDS = 60
