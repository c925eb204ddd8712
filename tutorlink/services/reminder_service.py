from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from ..config import get_settings
from ..core import constants
from ..db import models
from ..db.models.booking_plan_slot import SlotStatus
from ..db.models.notification import NotificationKind
from ..repositories import slots as slot_repository
from ..repositories import tutors as tutor_repository
from . import notification_service

logger = logging.getLogger(__name__)


def _session_window(slot: models.BookingPlanSlot) -> str:
    return f"{slot.start_time:%H:%M} - {slot.end_time:%H:%M} on {slot.start_time:%d.%m.%Y}"


def _send_slot_reminders(db: Session, slot: models.BookingPlanSlot, tutor: models.Tutor) -> None:
    tutor_name = (tutor.user.full_name or "").strip() or constants.DEFAULT_TUTOR_NAME
    window = _session_window(slot)
    notification_service.send_notification(
        db,
        tutor.user.id,
        constants.REMINDER_TITLE,
        f"You have a 1-1 session at {window}.",
        NotificationKind.booking_reminder,
        constants.TUTOR_REMINDER_URL,
    )
    notification_service.send_notification(
        db,
        slot.user_id,
        constants.REMINDER_TITLE,
        f"You have a 1-1 session with {tutor_name} at {window}.",
        NotificationKind.booking_reminder,
        constants.LEARNER_REMINDER_URL,
    )


def send_tutor_reminders_for_upcoming_slots(db: Session, now: datetime | None = None) -> int:
    """Remind tutor and learner of paid sessions starting within the lead window.

    Slots are handled one by one; a slot is only flagged once both of its own
    notifications went out, so a failed one stays eligible for the next run.
    Returns the number of slots flagged.
    """

    settings = get_settings()
    now = now or datetime.now(timezone.utc)
    window_end = now + timedelta(minutes=settings.reminder_lead_minutes)
    slots = slot_repository.find_due_for_reminder(db, SlotStatus.paid, now, window_end)
    if not slots:
        return 0

    logger.info("Upcoming slots found for reminder", extra={"count": len(slots)})
    sent = 0
    for slot in slots:
        slot_id = slot.id
        try:
            tutor = tutor_repository.find_by_id(db, slot.tutor_id)
            if tutor is None or tutor.user is None:
                logger.warning("Tutor or tutor user not found for slot", extra={"slot_id": slot_id})
                continue
            _send_slot_reminders(db, slot, tutor)
            slot.reminder_sent = True
            slot_repository.save(db, slot)
        except Exception:
            db.rollback()
            logger.exception("Failed to send reminder for slot", extra={"slot_id": slot_id})
            continue
        sent += 1
        logger.info(
            "Reminder sent",
            extra={"slot_id": slot_id, "tutor_user_id": tutor.user_id, "learner_user_id": slot.user_id},
        )
    return sent


__all__ = ["send_tutor_reminders_for_upcoming_slots"]
