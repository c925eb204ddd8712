from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models


def find_by_id(db: Session, plan_id: int) -> models.BookingPlan | None:
    return db.get(models.BookingPlan, plan_id)


def find_all_by_ids(db: Session, plan_ids: Iterable[int]) -> list[models.BookingPlan]:
    ids = set(plan_ids)
    if not ids:
        return []
    return list(db.scalars(select(models.BookingPlan).where(models.BookingPlan.id.in_(ids))))
