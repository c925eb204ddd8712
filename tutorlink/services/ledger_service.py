"""Tutor wallet balance computed from settled earnings.

The balance is always rebuilt from payments and slot attendance, never
incremented, so calling :func:`recompute_balance` repeatedly is safe.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from ..config import get_settings
from ..db import models
from ..db.models.payment import PaymentType
from ..repositories import payments as payment_repository
from ..repositories import slots as slot_repository

_CENT = Decimal("0.01")


def _net_amount(payment: models.Payment, commission: Decimal) -> Decimal:
    if payment.net_amount is not None:
        return Decimal(payment.net_amount)
    amount = Decimal(payment.amount)
    return amount - amount * Decimal(commission)


def is_booking_released(db: Session, payment_id: int) -> bool:
    """True when the payment has slots and every one of them is fully confirmed."""
    slots = slot_repository.find_all_by_payment_id(db, payment_id)
    return bool(slots) and all(slot.fully_confirmed for slot in slots)


def recompute_balance(db: Session, tutor_id: int) -> Decimal:
    settings = get_settings()
    total = Decimal("0")
    for payment in payment_repository.find_paid_by_tutor(db, tutor_id):
        if payment.payment_type == PaymentType.course:
            total += _net_amount(payment, settings.commission_course)
        elif payment.payment_type == PaymentType.booking:
            if not is_booking_released(db, payment.id):
                continue
            total += _net_amount(payment, settings.commission_booking)
    return total.quantize(_CENT, rounding=ROUND_HALF_UP)


__all__ = ["recompute_balance", "is_booking_released"]
