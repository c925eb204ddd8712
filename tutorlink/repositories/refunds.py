from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from ..db import models
from ..db.models.refund_request import ACTIVE_REFUND_STATUSES, RefundType


def save(db: Session, refund: models.RefundRequest) -> models.RefundRequest:
    db.add(refund)
    db.commit()
    db.refresh(refund)
    return refund


def find_by_slot_and_type(
    db: Session, slot_id: int, refund_type: RefundType
) -> list[models.RefundRequest]:
    return list(
        db.scalars(
            select(models.RefundRequest).where(
                models.RefundRequest.slot_id == slot_id,
                models.RefundRequest.refund_type == refund_type,
            )
        )
    )


def exists_active_for_slot(db: Session, slot_id: int) -> bool:
    return bool(
        db.scalar(
            select(
                exists().where(
                    models.RefundRequest.slot_id == slot_id,
                    models.RefundRequest.status.in_(ACTIVE_REFUND_STATUSES),
                )
            )
        )
    )
