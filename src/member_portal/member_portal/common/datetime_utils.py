from __future__ import annotations

from datetime import date, datetime, timezone

from ..core.constants import ORG_TZ
from ..core.exceptions import ValidationError

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date (expected YYYY-MM-DD)")


def now_utc() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now(timezone.utc)


def to_org_time(now: datetime, tz=ORG_TZ) -> datetime:
    """Normalize an instant to the organization's fixed offset.

    Naive datetimes are read as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz)


def org_today(now: datetime, tz=ORG_TZ) -> date:
    return to_org_time(now, tz).date()


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def display_month(key: str) -> str:
    year, month = (int(p) for p in key.split("-"))
    return f"{MONTH_NAMES[month - 1]} {year}"
