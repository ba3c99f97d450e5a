from __future__ import annotations

import pytest

from src.member_portal.member_portal.core.enums import FeedbackFormStatus, Role
from src.member_portal.member_portal.core.exceptions import NotFoundError, ValidationError
from tests.fakes import d, ist, make_container, seeded_store

TODAY = d("2025-03-10")
OPEN = ist(2025, 3, 10, 14, 0)
BEFORE = ist(2025, 3, 10, 11, 0)


@pytest.fixture
def store():
    s = seeded_store()
    s.add_session("Intro to Git", TODAY, handler_id=2, handler="Asha Rao")
    s.add_session("Docker 101", TODAY, handler_id=3, handler="Vikram Shah", session_time="03:00 PM")
    return s


@pytest.fixture
def container(store):
    return make_container(store)


def _session_id(store, title):
    return next(s.session_id for s in store.sessions.values() if s.title == title)


def test_no_sessions_today(container):
    state = container.feedback_service.form_state(member_id=4, now=ist(2025, 3, 11, 14, 0))
    assert state.status == FeedbackFormStatus.NO_SESSIONS


def test_handler_exemption_applies_before_window(store):
    store.sessions.pop(_session_id(store, "Docker 101"))
    state = make_container(store).feedback_service.form_state(member_id=2, now=BEFORE)

    assert state.status == FeedbackFormStatus.HANDLER_EXEMPT
    assert "Intro to Git" in state.message


def test_window_before(container):
    state = container.feedback_service.form_state(member_id=4, now=BEFORE)
    assert state.status == FeedbackFormStatus.WINDOW_BEFORE


def test_open_form_hides_handled_sessions(container):
    state = container.feedback_service.form_state(member_id=2, now=OPEN)

    assert state.status == FeedbackFormStatus.OPEN
    assert [s.title for s in state.sessions] == ["Docker 101"]
    assert [s.title for s in state.handled] == ["Intro to Git"]


def test_all_submitted(container, store):
    container.feedback_service.submit(member_id=2, session_id=_session_id(store, "Docker 101"), rating=4, now=OPEN)

    state = container.feedback_service.form_state(member_id=2, now=OPEN)
    assert state.status == FeedbackFormStatus.ALL_SUBMITTED


def test_submit_stores_row_for_org_date(container, store):
    sid = _session_id(store, "Intro to Git")
    fid = container.feedback_service.submit(member_id=4, session_id=sid, rating="5", comments="  Great  ", now=OPEN)

    row = store.feedback[fid]
    assert (row.session_id, row.member_id, row.rating) == (sid, 4, 5)
    assert row.comments == "Great"
    assert row.feedback_date == TODAY


def test_submit_outside_window(container, store):
    with pytest.raises(ValidationError, match="opens"):
        container.feedback_service.submit(member_id=4, session_id=_session_id(store, "Intro to Git"), rating=4, now=BEFORE)


@pytest.mark.parametrize("rating", [None, "", "0", "6", "abc", "²", "٣", True, 3.5])
def test_submit_rejects_bad_rating(container, store, rating):
    with pytest.raises(ValidationError):
        container.feedback_service.submit(
            member_id=4, session_id=_session_id(store, "Intro to Git"), rating=rating, now=OPEN
        )


def test_submit_requires_session(container):
    with pytest.raises(ValidationError):
        container.feedback_service.submit(member_id=4, session_id=None, rating=4, now=OPEN)


def test_submit_only_for_today(container, store):
    future = store.add_session("Later", d("2025-03-12"))
    with pytest.raises(ValidationError):
        container.feedback_service.submit(member_id=4, session_id=future.session_id, rating=4, now=OPEN)


def test_handler_cannot_rate_own_session(container, store):
    with pytest.raises(ValidationError):
        container.feedback_service.submit(member_id=2, session_id=_session_id(store, "Intro to Git"), rating=5, now=OPEN)


def test_duplicate_same_day_is_refused(container, store):
    sid = _session_id(store, "Intro to Git")
    container.feedback_service.submit(member_id=4, session_id=sid, rating=5, now=OPEN)
    with pytest.raises(ValidationError, match="already submitted"):
        container.feedback_service.submit(member_id=4, session_id=sid, rating=3, now=OPEN)


def test_session_feedback_names_and_summary(container, store):
    sid = _session_id(store, "Intro to Git")
    store.add_feedback(sid, 4, 5, TODAY, "Loved it")
    store.add_feedback(sid, 77, 3, TODAY)
    store.add_feedback(sid, None, 4, TODAY)

    report = container.feedback_service.session_feedback(session_id=sid)

    assert report.summary.average == 4.0
    assert report.summary.count == 3
    assert sorted(e.member_name for e in report.entries) == ["Anonymous", "Anonymous", "Meera Iyer"]


def test_session_feedback_unknown_session(container):
    with pytest.raises(NotFoundError):
        container.feedback_service.session_feedback(session_id=9999)


def test_interest_feedback_and_admin_overview(container, store):
    interests = container.interest_service
    pending = interests.submit(
        member_id=4, topic="Pandas", session_type="Talk", preferred_date=d("2025-03-14"), now=BEFORE
    )
    approved = interests.submit(
        member_id=4, topic="Numpy", session_type="Talk", preferred_date=d("2025-03-13"), now=BEFORE
    )
    sid = interests.approve(current_role=Role.ADMINISTRATOR, interest_id=approved)
    store.add_feedback(sid, 2, 5, d("2025-03-13"))
    store.add_feedback(sid, 3, 4, d("2025-03-13"))

    assert container.feedback_service.interest_feedback(interest_id=pending).summary.count == 0
    report = container.feedback_service.interest_feedback(interest_id=approved)
    assert report.session.session_id == sid
    assert report.summary.average == 4.5

    overview = container.feedback_service.admin_overview()
    assert [(row["interest"].interest_id, row["summary"].average) for row in overview] == [(approved, 4.5)]
