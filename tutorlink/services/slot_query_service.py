from __future__ import annotations

from sqlalchemy.orm import Session

from ..core.errors import TutorNotFound, UnauthorizedError
from ..db import models, schemas
from ..db.models.booking_plan_slot import SlotStatus
from ..repositories import plans as plan_repository
from ..repositories import slots as slot_repository
from ..repositories import tutors as tutor_repository


def _meeting_url_map(db: Session, slots: list[models.BookingPlanSlot]) -> dict[int, str]:
    plan_ids = {slot.booking_plan_id for slot in slots if slot.booking_plan_id is not None}
    if not plan_ids:
        return {}
    return {
        plan.id: (plan.meeting_url or "").strip()
        for plan in plan_repository.find_all_by_ids(db, plan_ids)
    }


def _tutor_name_map(db: Session, slots: list[models.BookingPlanSlot]) -> dict[int, str]:
    tutor_ids = {slot.tutor_id for slot in slots if slot.tutor_id is not None}
    if not tutor_ids:
        return {}
    return {
        tutor.id: ((tutor.user.full_name if tutor.user else None) or "").strip()
        for tutor in tutor_repository.find_all_by_ids(db, tutor_ids)
    }


def _to_response(
    slot: models.BookingPlanSlot,
    meeting_urls: dict[int, str],
    tutor_names: dict[int, str],
) -> schemas.BookingPlanSlotResponse:
    meeting_url = None
    if slot.status == SlotStatus.paid and slot.booking_plan_id is not None:
        meeting_url = meeting_urls.get(slot.booking_plan_id) or None
    return schemas.BookingPlanSlotResponse(
        slot_id=slot.id,
        booking_plan_id=slot.booking_plan_id,
        tutor_id=slot.tutor_id,
        user_id=slot.user_id,
        payment_id=slot.payment_id,
        status=slot.status.value,
        start_time=slot.start_time,
        end_time=slot.end_time,
        learner_join=bool(slot.learner_join),
        tutor_join=bool(slot.tutor_join),
        learner_evidence=slot.learner_evidence,
        tutor_evidence=slot.tutor_evidence,
        meeting_url=meeting_url,
        tutor_full_name=tutor_names.get(slot.tutor_id),
    )


def _project(db: Session, slots: list[models.BookingPlanSlot]) -> list[schemas.BookingPlanSlotResponse]:
    if not slots:
        return []
    meeting_urls = _meeting_url_map(db, slots)
    tutor_names = _tutor_name_map(db, slots)
    return [_to_response(slot, meeting_urls, tutor_names) for slot in slots]


def get_slots_for_user(db: Session, user_id: int) -> list[schemas.BookingPlanSlotResponse]:
    return _project(db, slot_repository.find_by_owner_user_id(db, user_id))


def get_paid_slots_by_tutor(db: Session, tutor_id: int) -> list[schemas.BookingPlanSlotResponse]:
    return _project(db, slot_repository.find_by_tutor_id_and_status(db, tutor_id, SlotStatus.paid))


def get_slots_for_tutor(db: Session, user_id: int) -> list[schemas.BookingPlanSlotResponse]:
    tutor = tutor_repository.find_by_user_id(db, user_id)
    if tutor is None:
        raise TutorNotFound()
    return _project(db, slot_repository.find_by_tutor_id(db, tutor.id))


def get_paid_slots_for_tutor_user(
    db: Session, user_id: int, tutor_id: int
) -> list[schemas.BookingPlanSlotResponse]:
    """Paid slots of ``tutor_id``, readable only by that tutor's own user."""
    tutor = tutor_repository.find_by_user_id(db, user_id)
    if tutor is None or tutor.id != tutor_id:
        raise UnauthorizedError()
    return get_paid_slots_by_tutor(db, tutor_id)


__all__ = [
    "get_slots_for_user",
    "get_paid_slots_by_tutor",
    "get_paid_slots_for_tutor_user",
    "get_slots_for_tutor",
]
