from __future__ import annotations

from datetime import date

from src.member_portal.member_portal.feedback.aggregation import aggregate, partition
from src.member_portal.member_portal.sessions.model import Session


def _session(session_id, handler_id):
    return Session(
        session_id=session_id,
        title=f"Session {session_id}",
        session_date=date(2025, 3, 10),
        session_time="01:00 PM",
        session_type="Talk",
        handler="Someone",
        handler_id=handler_id,
    )


def test_aggregate_empty():
    summary = aggregate([])
    assert (summary.average, summary.count) == (0.0, 0)


def test_aggregate_mean_to_one_decimal():
    assert aggregate([5, 3, 4]).average == 4.0
    assert aggregate([1, 2, 2]).average == 1.7
    assert aggregate([4, 5]).count == 2


def test_aggregate_rounds_ties_up():
    # 4.25 would be 4.2 with banker's rounding
    assert aggregate([4, 4, 4, 5]).average == 4.3
    assert aggregate([2, 2, 2, 3]).average == 2.3


def test_aggregate_accepts_rows_and_mappings():
    class Row:
        def __init__(self, rating):
            self.rating = rating

    assert aggregate([{"rating": 5}, Row(4)]).average == 4.5


def test_partition_splits_handled_submitted_pending():
    sessions = [_session(1, handler_id=7), _session(2, handler_id=8), _session(3, handler_id=9)]

    result = partition(7, sessions, {2})

    assert [s.session_id for s in result.handled] == [1]
    assert [s.session_id for s in result.submitted] == [2]
    assert [s.session_id for s in result.pending] == [3]
    assert result.handles_some
    assert not result.handles_all
    assert not result.all_submitted


def test_partition_handler_of_everything():
    result = partition(7, [_session(1, handler_id=7)], set())
    assert result.handles_all
    assert not result.all_submitted


def test_partition_all_submitted():
    result = partition(7, [_session(1, handler_id=8), _session(2, handler_id=7)], {1})
    assert result.all_submitted
    assert result.total == 2
