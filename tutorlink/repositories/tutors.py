from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..db import models


def find_by_id(db: Session, tutor_id: int) -> models.Tutor | None:
    return db.get(models.Tutor, tutor_id)


def find_by_user_id(db: Session, user_id: int) -> models.Tutor | None:
    return db.scalars(
        select(models.Tutor).where(models.Tutor.user_id == user_id)
    ).first()


def find_all_by_ids(db: Session, tutor_ids: Iterable[int]) -> list[models.Tutor]:
    ids = set(tutor_ids)
    if not ids:
        return []
    return list(
        db.scalars(
            select(models.Tutor)
            .options(selectinload(models.Tutor.user))
            .where(models.Tutor.id.in_(ids))
        )
    )


def save(db: Session, tutor: models.Tutor) -> models.Tutor:
    db.add(tutor)
    db.commit()
    return tutor
