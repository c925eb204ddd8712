from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models
from ..db.models.booking_plan_slot import SlotStatus


def find_by_id(db: Session, slot_id: int) -> models.BookingPlanSlot | None:
    return db.get(models.BookingPlanSlot, slot_id)


def find_all_by_payment_id(db: Session, payment_id: int) -> list[models.BookingPlanSlot]:
    return list(
        db.scalars(
            select(models.BookingPlanSlot)
            .where(models.BookingPlanSlot.payment_id == payment_id)
            .order_by(models.BookingPlanSlot.id)
        )
    )


def find_by_owner_user_id(db: Session, user_id: int) -> list[models.BookingPlanSlot]:
    return list(
        db.scalars(
            select(models.BookingPlanSlot)
            .where(models.BookingPlanSlot.user_id == user_id)
            .order_by(models.BookingPlanSlot.start_time, models.BookingPlanSlot.id)
        )
    )


def find_by_tutor_id(db: Session, tutor_id: int) -> list[models.BookingPlanSlot]:
    return list(
        db.scalars(
            select(models.BookingPlanSlot)
            .where(models.BookingPlanSlot.tutor_id == tutor_id)
            .order_by(models.BookingPlanSlot.start_time, models.BookingPlanSlot.id)
        )
    )


def find_by_tutor_id_and_status(
    db: Session, tutor_id: int, status: SlotStatus
) -> list[models.BookingPlanSlot]:
    return list(
        db.scalars(
            select(models.BookingPlanSlot)
            .where(
                models.BookingPlanSlot.tutor_id == tutor_id,
                models.BookingPlanSlot.status == status,
            )
            .order_by(models.BookingPlanSlot.start_time, models.BookingPlanSlot.id)
        )
    )


def find_due_for_reminder(
    db: Session, status: SlotStatus, window_start: datetime, window_end: datetime
) -> list[models.BookingPlanSlot]:
    """Slots in ``status`` starting within ``[window_start, window_end)`` with no reminder yet."""
    return list(
        db.scalars(
            select(models.BookingPlanSlot)
            .where(
                models.BookingPlanSlot.status == status,
                models.BookingPlanSlot.reminder_sent.is_(False),
                models.BookingPlanSlot.start_time >= window_start,
                models.BookingPlanSlot.start_time < window_end,
            )
            .order_by(models.BookingPlanSlot.start_time, models.BookingPlanSlot.id)
        )
    )


def find_for_auto_confirm(db: Session, now: datetime) -> list[models.BookingPlanSlot]:
    return list(
        db.scalars(
            select(models.BookingPlanSlot)
            .where(
                models.BookingPlanSlot.status == SlotStatus.paid,
                models.BookingPlanSlot.tutor_join.is_(True),
                models.BookingPlanSlot.learner_join.is_(False),
                models.BookingPlanSlot.end_time < now,
            )
            .order_by(models.BookingPlanSlot.id)
        )
    )


def save(db: Session, slot: models.BookingPlanSlot) -> models.BookingPlanSlot:
    db.add(slot)
    db.commit()
    return slot
