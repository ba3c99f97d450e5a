from __future__ import annotations

import pytest

from src.member_portal.member_portal.core.enums import InterestStatus, Role
from src.member_portal.member_portal.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from tests.fakes import FakeInterestsRepo, d, ist, make_container, seeded_store

MORNING = ist(2025, 3, 10, 10, 0)  # Monday
AFTERNOON = ist(2025, 3, 10, 12, 30)
ADMIN = Role.ADMINISTRATOR


@pytest.fixture
def store():
    return seeded_store()


@pytest.fixture
def svc(store):
    return make_container(store).interest_service


def _submit(svc, *, member_id=2, topic="Intro to Git", preferred_date="2025-03-12", now=MORNING):
    return svc.submit(
        member_id=member_id,
        topic=topic,
        session_type="Workshop",
        preferred_date=d(preferred_date),
        description="  Branching basics  ",
        now=now,
    )


def test_submit_creates_pending_interest(svc, store):
    iid = _submit(svc)

    interest = store.interests[iid]
    assert interest.status == InterestStatus.PENDING
    assert interest.member_name == "Asha Rao"
    assert interest.description == "Branching basics"


def test_submit_requires_topic_and_date(svc):
    with pytest.raises(ValidationError):
        _submit(svc, topic="  ")
    with pytest.raises(ValidationError):
        svc.submit(member_id=2, topic="Git", session_type="Talk", preferred_date=None, now=MORNING)


def test_submit_rejects_past_sunday_and_late_same_day(svc):
    with pytest.raises(ValidationError):
        _submit(svc, preferred_date="2025-03-09")
    with pytest.raises(ValidationError):
        _submit(svc, preferred_date="2025-03-16")
    with pytest.raises(ValidationError, match="12:30"):
        _submit(svc, preferred_date="2025-03-10", now=AFTERNOON)


def test_same_day_request_allowed_before_cutoff(svc, store):
    iid = _submit(svc, preferred_date="2025-03-10", now=ist(2025, 3, 10, 12, 29))
    assert store.interests[iid].preferred_date == d("2025-03-10")


def test_submit_unknown_member(svc):
    with pytest.raises(NotFoundError):
        _submit(svc, member_id=999)


def test_submit_on_booked_date_reports_existing_session(svc):
    svc.approve(current_role=ADMIN, interest_id=_submit(svc))

    with pytest.raises(ConflictError) as exc:
        _submit(svc, member_id=4, topic="Docker 101")

    assert exc.value.topic == "Intro to Git"
    assert exc.value.handler == "Asha Rao"
    assert exc.value.session_date == d("2025-03-12")


def test_approve_creates_session_with_default_time(svc, store):
    iid = _submit(svc)
    sid = svc.approve(current_role=ADMIN, interest_id=iid)

    session = store.sessions[sid]
    assert session.title == "Intro to Git"
    assert session.session_time == "01:00 PM"
    assert session.handler_id == 2
    assert store.interests[iid].status == InterestStatus.APPROVED
    assert store.interests[iid].session_id == sid


def test_approve_normalizes_given_time(svc, store):
    sid = svc.approve(current_role=ADMIN, interest_id=_submit(svc), session_time="15:30")
    assert store.sessions[sid].session_time == "03:30 PM"


def test_approve_rejects_bad_time(svc):
    with pytest.raises(ValidationError):
        svc.approve(current_role=ADMIN, interest_id=_submit(svc), session_time="25:00")


@pytest.mark.parametrize("role", [Role.MEMBER, Role.SESSION_INCHARGE])
def test_approve_requires_capability(svc, role):
    iid = _submit(svc)
    with pytest.raises(AuthorizationError):
        svc.approve(current_role=role, interest_id=iid)


def test_approve_twice_is_refused(svc):
    iid = _submit(svc)
    svc.approve(current_role=Role.PRESIDENT, interest_id=iid)
    with pytest.raises(ValidationError):
        svc.approve(current_role=Role.PRESIDENT, interest_id=iid)


def test_second_pending_on_same_date_conflicts_on_approve(svc, store):
    first = _submit(svc)
    second = _submit(svc, member_id=4, topic="Docker 101")
    svc.approve(current_role=ADMIN, interest_id=first)

    with pytest.raises(ConflictError):
        svc.approve(current_role=ADMIN, interest_id=second)
    assert store.interests[second].status == InterestStatus.PENDING


def test_approve_unknown_interest(svc):
    with pytest.raises(NotFoundError):
        svc.approve(current_role=ADMIN, interest_id=12345)


def test_reject_removes_pending(svc, store):
    iid = _submit(svc)
    svc.reject(current_role=Role.VICE_PRESIDENT, interest_id=iid)
    assert iid not in store.interests


def test_reject_approved_is_refused(svc):
    iid = _submit(svc)
    svc.approve(current_role=ADMIN, interest_id=iid)
    with pytest.raises(ValidationError):
        svc.reject(current_role=ADMIN, interest_id=iid)


def test_reschedule_moves_interest_and_session(svc, store):
    iid = _submit(svc)
    sid = svc.approve(current_role=ADMIN, interest_id=iid)

    svc.reschedule(current_role=ADMIN, interest_id=iid, new_date=d("2025-03-14"), session_time="2:00 PM", now=MORNING)

    assert store.interests[iid].preferred_date == d("2025-03-14")
    assert store.sessions[sid].session_date == d("2025-03-14")
    assert store.sessions[sid].session_time == "02:00 PM"


def test_reschedule_to_own_date_is_not_a_conflict(svc, store):
    iid = _submit(svc)
    sid = svc.approve(current_role=ADMIN, interest_id=iid)

    svc.reschedule(current_role=ADMIN, interest_id=iid, new_date=d("2025-03-12"), now=MORNING)
    assert store.sessions[sid].session_time == "01:00 PM"


def test_reschedule_onto_other_session_conflicts(svc):
    first = _submit(svc)
    second = _submit(svc, member_id=4, topic="Docker 101", preferred_date="2025-03-13")
    svc.approve(current_role=ADMIN, interest_id=first)
    svc.approve(current_role=ADMIN, interest_id=second)

    with pytest.raises(ConflictError):
        svc.reschedule(current_role=ADMIN, interest_id=second, new_date=d("2025-03-12"), now=MORNING)


def test_reschedule_rules(svc):
    iid = _submit(svc)
    with pytest.raises(ValidationError):
        svc.reschedule(current_role=ADMIN, interest_id=iid, new_date=d("2025-03-14"), now=MORNING)

    svc.approve(current_role=ADMIN, interest_id=iid)
    with pytest.raises(ValidationError):
        svc.reschedule(current_role=ADMIN, interest_id=iid, new_date=d("2025-03-01"), now=MORNING)
    with pytest.raises(AuthorizationError):
        svc.reschedule(current_role=Role.MEMBER, interest_id=iid, new_date=d("2025-03-14"), now=MORNING)


def test_delete_cascades_session_and_feedback(svc, store):
    iid = _submit(svc)
    sid = svc.approve(current_role=ADMIN, interest_id=iid)
    store.add_feedback(sid, 4, 5, d("2025-03-12"))

    svc.delete(current_role=ADMIN, interest_id=iid)

    assert iid not in store.interests
    assert sid not in store.sessions
    assert not [f for f in store.feedback.values() if f.session_id == sid]


def test_delete_pending_is_refused(svc):
    with pytest.raises(ValidationError):
        svc.delete(current_role=ADMIN, interest_id=_submit(svc))


def test_create_manual_bypasses_pending(svc, store):
    iid, sid = svc.create_manual(
        current_role=ADMIN,
        member_id=3,
        topic="SQL joins",
        session_type="Talk",
        session_date=d("2025-03-13"),
        session_time="11:00 AM",
        now=MORNING,
    )

    assert store.interests[iid].status == InterestStatus.APPROVED
    assert store.interests[iid].session_id == sid
    assert store.sessions[sid].handler == "Vikram Shah"
    assert store.sessions[sid].session_time == "11:00 AM"


def test_create_manual_checks(svc):
    kwargs = dict(topic="SQL", session_type="Talk", session_date=d("2025-03-13"), now=MORNING)
    with pytest.raises(AuthorizationError):
        svc.create_manual(current_role=Role.MEMBER, member_id=3, **kwargs)
    with pytest.raises(NotFoundError):
        svc.create_manual(current_role=ADMIN, member_id=999, **kwargs)

    svc.create_manual(current_role=ADMIN, member_id=3, **kwargs)
    with pytest.raises(ConflictError):
        svc.create_manual(current_role=ADMIN, member_id=2, **kwargs)


def test_list_for_admin_splits_by_status(svc):
    pending = _submit(svc, preferred_date="2025-03-13")
    approved = _submit(svc, member_id=4, topic="Docker 101")
    svc.approve(current_role=ADMIN, interest_id=approved)

    data = svc.list_for_admin()

    assert [i.interest_id for i in data["pending"]] == [pending]
    assert [i.interest_id for i in data["approved"]] == [approved]
    assert [i.interest_id for i in svc.list_for_member(member_id=2)] == [pending]


def test_pending_request_for_an_already_booked_day_conflicts(svc, store):
    store.add_session("Existing talk", d("2025-03-10"), handler_id=3, handler="Vikram Shah")
    iid = FakeInterestsRepo(store).create(
        member_id=2,
        member_name="Asha Rao",
        topic="Late idea",
        session_type="Talk",
        preferred_date=d("2025-03-10"),
        description=None,
    )

    with pytest.raises(ConflictError) as exc:
        svc.approve(current_role=ADMIN, interest_id=iid)

    assert exc.value.topic == "Existing talk"
    assert store.interests[iid].status == InterestStatus.PENDING
