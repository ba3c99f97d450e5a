from __future__ import annotations

from ..core.constants import MAX_RATING, MIN_RATING
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_matching(value: str, confirmation: str, field_name: str) -> str:
    if value != confirmation:
        raise ValidationError(f"{field_name} values don't match")
    return value


def require_rating(value) -> int:
    # bool is an int subclass; a checkbox value must not pass as a rating
    if isinstance(value, bool):
        raise ValidationError("Please provide a rating")
    if isinstance(value, str):
        value = value.strip()
        # str.isdigit also accepts superscripts and non-ASCII digits
        if not (value.isascii() and value.isdigit()):
            raise ValidationError("Please provide a rating")
        value = int(value)
    if not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError(f"Rating must be a whole number from {MIN_RATING} to {MAX_RATING}")
    return value
