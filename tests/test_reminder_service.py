from datetime import datetime, timedelta, timezone

from tutorlink.db import models
from tutorlink.repositories import tutors as tutor_repository
from tutorlink.services import notification_service, reminder_service

from factories import create_plan, create_slot, create_tutor, create_user


def _upcoming_slot(session, tutor, learner, minutes=10, **fields):
    plan = create_plan(session, tutor)
    return create_slot(session, tutor, learner, plan, starts_in=timedelta(minutes=minutes), **fields)


def test_no_due_slots_makes_no_calls(db_session, sent_notifications, monkeypatch):
    tutor_lookups = []
    monkeypatch.setattr(
        tutor_repository, "find_by_id", lambda db, tutor_id: tutor_lookups.append(tutor_id)
    )

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 0
    assert tutor_lookups == []
    assert sent_notifications == []


def test_reminds_tutor_and_learner_once(db_session, sent_notifications):
    learner = create_user(db_session)
    tutor = create_tutor(db_session, full_name="Ada Tutor")
    slot = _upcoming_slot(db_session, tutor, learner)

    sent = reminder_service.send_tutor_reminders_for_upcoming_slots(db_session)

    assert sent == 1
    assert [(n["user_id"], n["url"]) for n in sent_notifications] == [
        (tutor.user_id, "/booked-slots"),
        (learner.id, "/my-bookings"),
    ]
    assert all(n["kind"] == models.NotificationKind.booking_reminder for n in sent_notifications)
    assert "Ada Tutor" in sent_notifications[1]["content"]
    db_session.refresh(slot)
    assert slot.reminder_sent is True

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 0
    assert len(sent_notifications) == 2


def test_already_reminded_slot_is_ignored(db_session, sent_notifications):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    _upcoming_slot(db_session, tutor, learner, reminder_sent=True)

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 0
    assert sent_notifications == []


def test_only_paid_slots_inside_lead_window(db_session, sent_notifications):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    too_late = _upcoming_slot(db_session, tutor, learner, minutes=45)
    started = _upcoming_slot(db_session, tutor, learner, minutes=-5)
    locked = _upcoming_slot(db_session, tutor, learner, status=models.SlotStatus.locked)

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 0
    assert sent_notifications == []
    for slot in (too_late, started, locked):
        db_session.refresh(slot)
        assert slot.reminder_sent is False


def test_lead_window_is_measured_from_now(db_session, sent_notifications):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    slot = _upcoming_slot(db_session, tutor, learner, minutes=45)

    later = datetime.now(timezone.utc) + timedelta(minutes=35)
    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session, now=later) == 1

    db_session.refresh(slot)
    assert slot.reminder_sent is True


def test_slot_without_tutor_user_is_skipped(db_session, sent_notifications):
    learner = create_user(db_session)
    orphan_tutor = create_tutor(db_session, with_user=False)
    tutor = create_tutor(db_session)
    orphan_slot = _upcoming_slot(db_session, orphan_tutor, learner)
    slot = _upcoming_slot(db_session, tutor, learner, minutes=12)

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 1

    db_session.refresh(orphan_slot)
    db_session.refresh(slot)
    assert orphan_slot.reminder_sent is False
    assert slot.reminder_sent is True
    assert {n["user_id"] for n in sent_notifications} == {tutor.user_id, learner.id}


def test_slot_with_unknown_tutor_is_skipped(db_session, sent_notifications):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    slot = _upcoming_slot(db_session, tutor, learner)
    slot.tutor_id = 9999
    db_session.commit()

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 0
    db_session.refresh(slot)
    assert slot.reminder_sent is False
    assert sent_notifications == []


def test_failed_slot_does_not_block_the_batch(db_session, monkeypatch):
    learner = create_user(db_session)
    failing_tutor = create_tutor(db_session, email="a@example.com", full_name="Tutor A")
    healthy_tutor = create_tutor(db_session, email="b@example.com", full_name="Tutor B")
    slot_a = _upcoming_slot(db_session, failing_tutor, learner, minutes=5)
    slot_b = _upcoming_slot(db_session, healthy_tutor, learner, minutes=8)
    delivered = []

    def flaky_send(db, user_id, title, content, kind, primary_action_url=None):
        if user_id == failing_tutor.user_id:
            raise RuntimeError("push gateway down")
        delivered.append(user_id)

    monkeypatch.setattr(notification_service, "send_notification", flaky_send)

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 1

    db_session.refresh(slot_a)
    db_session.refresh(slot_b)
    assert slot_a.reminder_sent is False
    assert slot_b.reminder_sent is True
    assert delivered == [healthy_tutor.user_id, learner.id]


def test_learner_failure_discards_partial_reminder(db_session, monkeypatch):
    learner = create_user(db_session)
    tutor = create_tutor(db_session)
    slot = _upcoming_slot(db_session, tutor, learner)
    real_send = notification_service.send_notification

    def learner_side_fails(db, user_id, title, content, kind, primary_action_url=None):
        if user_id == learner.id:
            raise RuntimeError("learner device unreachable")
        return real_send(db, user_id, title, content, kind, primary_action_url)

    monkeypatch.setattr(notification_service, "send_notification", learner_side_fails)

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 0

    db_session.refresh(slot)
    assert slot.reminder_sent is False
    assert db_session.query(models.Notification).count() == 0

    monkeypatch.setattr(notification_service, "send_notification", real_send)
    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 1
    assert db_session.query(models.Notification).count() == 2


def test_tutor_lookup_failure_does_not_block_the_batch(db_session, sent_notifications, monkeypatch):
    learner = create_user(db_session)
    failing_tutor = create_tutor(db_session, email="a@example.com")
    healthy_tutor = create_tutor(db_session, email="b@example.com")
    slot_a = _upcoming_slot(db_session, failing_tutor, learner, minutes=5)
    slot_b = _upcoming_slot(db_session, healthy_tutor, learner, minutes=8)
    failing_tutor_id = failing_tutor.id
    find_tutor = tutor_repository.find_by_id

    def flaky_find(db, tutor_id):
        if tutor_id == failing_tutor_id:
            raise RuntimeError("db hiccup")
        return find_tutor(db, tutor_id)

    monkeypatch.setattr(tutor_repository, "find_by_id", flaky_find)

    assert reminder_service.send_tutor_reminders_for_upcoming_slots(db_session) == 1

    db_session.refresh(slot_a)
    db_session.refresh(slot_b)
    assert slot_a.reminder_sent is False
    assert slot_b.reminder_sent is True
    assert [n["user_id"] for n in sent_notifications] == [healthy_tutor.user_id, learner.id]
