from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import AbstractSet, Iterable, Sequence

from ..sessions.model import Session
from .model import FeedbackObligations, FeedbackSummary


def _rating(row) -> int:
    if isinstance(row, Mapping):
        return int(row["rating"])
    if isinstance(row, int):
        return row
    return int(row.rating)


def round_half_away(value: Decimal, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    # ROUND_HALF_UP in decimal rounds ties away from zero
    return float(value.quantize(quantum, rounding=ROUND_HALF_UP))


def aggregate(rows: Iterable) -> FeedbackSummary:
    """Mean rating rounded to one decimal; (0.0, 0) for no rows."""
    ratings = [_rating(r) for r in rows]
    if not ratings:
        return FeedbackSummary(average=0.0, count=0)
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return FeedbackSummary(average=round_half_away(mean), count=len(ratings))


def partition(
    member_id: int,
    today_sessions: Sequence[Session],
    submitted_session_ids: AbstractSet[int],
) -> FeedbackObligations:
    """Split today's sessions into handled / already rated / still owed."""
    handled: list[Session] = []
    submitted: list[Session] = []
    pending: list[Session] = []

    for s in today_sessions:
        if s.is_handled_by(member_id):
            handled.append(s)
        elif s.session_id in submitted_session_ids:
            submitted.append(s)
        else:
            pending.append(s)

    return FeedbackObligations(handled=handled, submitted=submitted, pending=pending)
