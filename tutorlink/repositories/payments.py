from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models
from ..db.models.payment import PaymentStatus


def find_by_id(db: Session, payment_id: int) -> models.Payment | None:
    return db.get(models.Payment, payment_id)


def find_paid_by_tutor(db: Session, tutor_id: int) -> list[models.Payment]:
    return list(
        db.scalars(
            select(models.Payment)
            .where(
                models.Payment.tutor_id == tutor_id,
                models.Payment.status == PaymentStatus.paid,
            )
            .order_by(models.Payment.id)
        )
    )
