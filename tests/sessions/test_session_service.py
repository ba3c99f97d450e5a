from __future__ import annotations

import pytest

from src.member_portal.member_portal.core.exceptions import ValidationError
from src.member_portal.member_portal.sessions.service import (
    SessionService,
    format_session_time,
    normalize_session_time,
)
from tests.fakes import FakeFeedbackRepo, FakeSessionsRepo, d, ist, seeded_store


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("13:00", "1:00 PM"),
        ("00:15", "12:15 AM"),
        ("12:05", "12:05 PM"),
        ("09:30:00", "9:30 AM"),
        ("01:00 PM", "01:00 PM"),
        ("TBD", "TBD"),
    ],
)
def test_format_session_time(raw, expected):
    assert format_session_time(raw) == expected


def test_normalize_session_time():
    assert normalize_session_time("13:00") == "01:00 PM"
    assert normalize_session_time("9:05 am") == "09:05 AM"
    with pytest.raises(ValidationError):
        normalize_session_time("noon")


@pytest.fixture
def store():
    return seeded_store()


@pytest.fixture
def svc(store):
    return SessionService(FakeSessionsRepo(store), FakeFeedbackRepo(store))


def test_today_and_upcoming_sorted_by_time(svc, store):
    store.add_session("Late talk", d("2025-03-10"), session_time="04:00 PM")
    store.add_session("Early talk", d("2025-03-10"), session_time="10:00 AM")
    store.add_session("Tomorrow", d("2025-03-11"))
    store.add_session("Yesterday", d("2025-03-09"))

    board = svc.today_and_upcoming(now=ist(2025, 3, 10, 9, 0))

    assert board.today == d("2025-03-10")
    assert [s.title for s in board.today_sessions] == ["Early talk", "Late talk"]
    assert [s.title for s in board.upcoming_sessions] == ["Tomorrow"]


def test_today_follows_org_date_not_utc(svc, store):
    store.add_session("Morning", d("2025-03-11"))
    # 2025-03-10 20:00 UTC is already 2025-03-11 in the org timezone
    assert [s.title for s in svc.today_sessions(now=ist(2025, 3, 11, 1, 30))] == ["Morning"]


def test_history_covers_handled_and_rated_sessions(svc, store):
    handled = store.add_session("My talk", d("2025-03-05"), handler_id=2, handler="Asha Rao")
    rated = store.add_session("Their talk", d("2025-03-06"), handler_id=3)
    store.add_session("Skipped", d("2025-03-07"), handler_id=3)
    upcoming = store.add_session("Next talk", d("2025-03-20"), handler_id=2, handler="Asha Rao")
    store.add_feedback(handled.session_id, 4, 5, d("2025-03-05"))
    store.add_feedback(handled.session_id, 3, 4, d("2025-03-05"))
    own = store.add_feedback(rated.session_id, 2, 3, d("2025-03-06"))

    history = svc.history(member_id=2, now=ist(2025, 3, 10, 9, 0))

    past = {e.session.title: e for e in history.past}
    assert set(past) == {"My talk", "Their talk"}
    assert past["My talk"].handled_by_member
    assert past["My talk"].summary.average == 4.5
    assert past["Their talk"].own_feedback == own
    assert [e.session.session_id for e in history.upcoming] == [upcoming.session_id]
