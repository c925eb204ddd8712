from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from ..core import constants
from ..core.errors import (
    InvalidStateError,
    PaymentNotFound,
    PlanNotFound,
    SlotNotFound,
    TutorNotFound,
    UnauthorizedError,
)
from ..db import models
from ..db.models.booking_plan_slot import SlotStatus
from ..db.models.notification import NotificationKind
from ..db.models.payment import PaymentType
from ..db.models.refund_request import ACTIVE_REFUND_STATUSES, RefundStatus, RefundType
from ..repositories import payments as payment_repository
from ..repositories import plans as plan_repository
from ..repositories import refunds as refund_repository
from ..repositories import slots as slot_repository
from ..repositories import tutors as tutor_repository
from . import ledger_service, notification_service

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _get_slot(db: Session, slot_id: int) -> models.BookingPlanSlot:
    slot = slot_repository.find_by_id(db, slot_id)
    if slot is None:
        raise SlotNotFound()
    return slot


def _ensure_paid(slot: models.BookingPlanSlot) -> None:
    if slot.status != SlotStatus.paid:
        raise InvalidStateError()


def _get_learner_slot(db: Session, learner_user_id: int, slot_id: int) -> models.BookingPlanSlot:
    slot = _get_slot(db, slot_id)
    if slot.user_id != learner_user_id:
        raise UnauthorizedError()
    _ensure_paid(slot)
    return slot


def calculate_refund_amount(slot: models.BookingPlanSlot, plan: models.BookingPlan) -> Decimal:
    minutes = int(slot.duration.total_seconds() // 60)
    if minutes <= 0:
        return Decimal("0.00")
    price_per_hour = Decimal(plan.price_per_hour)
    return (price_per_hour * minutes / 60).quantize(_CENT, rounding=ROUND_HALF_UP)


def settle_if_all_confirmed(db: Session, tutor_id: int, payment_id: int) -> Decimal | None:
    """Refresh the tutor wallet once every slot of the payment is confirmed by both sides.

    Returns the new balance, or ``None`` while sibling slots are still waiting.
    """

    slots = slot_repository.find_all_by_payment_id(db, payment_id)
    if not slots or not all(slot.fully_confirmed for slot in slots):
        logger.info(
            "Payment not fully confirmed yet",
            extra={"payment_id": payment_id, "slots": len(slots)},
        )
        return None

    tutor = tutor_repository.find_by_id(db, tutor_id)
    if tutor is None:
        raise TutorNotFound()
    new_balance = ledger_service.recompute_balance(db, tutor_id)
    tutor.wallet_balance = new_balance
    tutor_repository.save(db, tutor)
    logger.info(
        "Tutor wallet recalculated",
        extra={"tutor_id": tutor_id, "payment_id": payment_id, "balance": str(new_balance)},
    )
    return new_balance


def learner_confirm_join(
    db: Session, learner_user_id: int, slot_id: int, evidence: str | None
) -> models.BookingPlanSlot:
    slot = _get_learner_slot(db, learner_user_id, slot_id)

    slot.learner_join = True
    slot.learner_evidence = evidence
    slot_repository.save(db, slot)
    logger.info(
        "Learner confirmed join", extra={"user_id": learner_user_id, "slot_id": slot_id}
    )

    if slot.payment_id is None:
        return slot
    payment = payment_repository.find_by_id(db, slot.payment_id)
    if payment is not None and payment.payment_type == PaymentType.booking:
        settle_if_all_confirmed(db, slot.tutor_id, payment.id)
    return slot


def tutor_confirm_join(
    db: Session, tutor_user_id: int, slot_id: int, evidence: str | None
) -> models.BookingPlanSlot:
    slot = _get_slot(db, slot_id)
    tutor = tutor_repository.find_by_user_id(db, tutor_user_id)
    if tutor is None:
        raise TutorNotFound()
    if tutor.id != slot.tutor_id:
        raise UnauthorizedError()
    _ensure_paid(slot)

    slot.tutor_join = True
    slot.tutor_evidence = evidence
    slot_repository.save(db, slot)
    logger.info("Tutor confirmed join", extra={"tutor_id": tutor.id, "slot_id": slot_id})

    _sync_tutor_attend_to_complaints(db, slot)

    if slot.payment_id is None:
        return slot
    payment = payment_repository.find_by_id(db, slot.payment_id)
    if payment is None:
        raise PaymentNotFound()
    if payment.payment_type == PaymentType.booking:
        settle_if_all_confirmed(db, slot.tutor_id, payment.id)
    return slot


def _sync_tutor_attend_to_complaints(db: Session, slot: models.BookingPlanSlot) -> None:
    complaints = refund_repository.find_by_slot_and_type(db, slot.id, RefundType.complaint)
    updated = False
    for refund in complaints:
        if refund.tutor_attend is None and refund.status in ACTIVE_REFUND_STATUSES:
            refund.tutor_attend = True
            refund.tutor_responded_at = _utc_now()
            updated = True
            logger.info(
                "Tutor attendance synced to complaint",
                extra={"slot_id": slot.id, "refund_request_id": refund.id},
            )
    if updated:
        db.commit()


def learner_complain(
    db: Session,
    learner_user_id: int,
    slot_id: int,
    evidence_url: str | None,
    reason: str | None = None,
) -> models.RefundRequest:
    slot = _get_learner_slot(db, learner_user_id, slot_id)
    plan = (
        plan_repository.find_by_id(db, slot.booking_plan_id)
        if slot.booking_plan_id is not None
        else None
    )
    if plan is None:
        raise PlanNotFound()
    tutor = tutor_repository.find_by_id(db, plan.tutor_id)
    if tutor is None:
        raise TutorNotFound()

    # complaint evidence only; learner_join stays untouched
    slot.learner_evidence = evidence_url
    slot_repository.save(db, slot)

    tutor_joined_before = bool(slot.tutor_join) or slot.tutor_evidence is not None
    refund = refund_repository.save(
        db,
        models.RefundRequest(
            booking_plan_id=plan.id,
            slot_id=slot.id,
            user_id=learner_user_id,
            tutor_id=tutor.id,
            refund_amount=calculate_refund_amount(slot, plan),
            status=RefundStatus.pending,
            refund_type=RefundType.complaint,
            reason=reason,
            tutor_attend=True if tutor_joined_before else None,
            tutor_responded_at=_utc_now() if tutor_joined_before else None,
        ),
    )
    logger.info(
        "Refund request created from complaint",
        extra={
            "user_id": learner_user_id,
            "slot_id": slot_id,
            "refund_request_id": refund.id,
            "refund_amount": str(refund.refund_amount),
        },
    )

    _notify_complaint(db, slot, tutor, refund, tutor_joined_before)
    return refund


def _notify_complaint(
    db: Session,
    slot: models.BookingPlanSlot,
    tutor: models.Tutor,
    refund: models.RefundRequest,
    tutor_joined_before: bool,
) -> None:
    starts_at = slot.start_time.strftime("%H:%M %d.%m.%Y")
    try:
        notification_service.send_notification(
            db,
            refund.user_id,
            constants.COMPLAINT_RECEIVED_TITLE,
            f"We recorded your complaint for the session at {starts_at}. "
            "Follow the refund status for updates.",
            NotificationKind.refund_available,
            constants.LEARNER_REFUND_URL.format(refund_request_id=refund.id),
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "Failed to notify learner about complaint",
            extra={"refund_request_id": refund.id},
        )

    if tutor_joined_before or tutor.user_id is None:
        return
    try:
        notification_service.send_notification(
            db,
            tutor.user_id,
            constants.COMPLAINT_TO_TUTOR_TITLE,
            f"A learner filed a complaint about the session at {starts_at}. "
            "Confirm your attendance or accept the refund.",
            NotificationKind.booking_complaint_to_tutor,
            constants.TUTOR_REFUND_URL.format(refund_request_id=refund.id),
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "Failed to notify tutor about complaint",
            extra={"refund_request_id": refund.id},
        )


def auto_confirm_learner_joins(db: Session, now: datetime | None = None) -> int:
    """Mark learners as joined once the tutor joined and the session ended without a complaint."""

    now = now or _utc_now()
    updated = 0
    for slot in slot_repository.find_for_auto_confirm(db, now):
        if refund_repository.exists_active_for_slot(db, slot.id):
            logger.info("Skip auto-confirm, active complaint", extra={"slot_id": slot.id})
            continue
        slot.learner_join = True
        slot_repository.save(db, slot)
        updated += 1
        logger.info("Learner join auto-confirmed", extra={"slot_id": slot.id})

        if slot.payment_id is None:
            continue
        payment = payment_repository.find_by_id(db, slot.payment_id)
        if payment is not None and payment.payment_type == PaymentType.booking:
            settle_if_all_confirmed(db, slot.tutor_id, payment.id)
    return updated


__all__ = [
    "learner_confirm_join",
    "tutor_confirm_join",
    "learner_complain",
    "settle_if_all_confirmed",
    "calculate_refund_amount",
    "auto_confirm_learner_joins",
]
