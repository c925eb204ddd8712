from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ...api import deps
from ...core.errors import BookingSlotError
from ...db.session import get_db
from ...db import schemas
from ...services import attendance_service, slot_query_service

router = APIRouter(prefix="/booking-slots", tags=["booking-slots"])


def _raise_http(exc: BookingSlotError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.post("/{slot_id}/learner-confirm", response_model=schemas.AttendanceResult)
def learner_confirm_join(
    slot_id: int,
    payload: schemas.EvidenceRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(deps.get_current_user_id),
):
    try:
        slot = attendance_service.learner_confirm_join(db, user_id, slot_id, payload.evidence_url)
    except BookingSlotError as exc:
        _raise_http(exc)
    return schemas.AttendanceResult(
        slot_id=slot.id, learner_join=slot.learner_join, tutor_join=slot.tutor_join
    )


@router.post("/{slot_id}/tutor-confirm", response_model=schemas.AttendanceResult)
def tutor_confirm_join(
    slot_id: int,
    payload: schemas.EvidenceRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(deps.get_current_user_id),
):
    try:
        slot = attendance_service.tutor_confirm_join(db, user_id, slot_id, payload.evidence_url)
    except BookingSlotError as exc:
        _raise_http(exc)
    return schemas.AttendanceResult(
        slot_id=slot.id, learner_join=slot.learner_join, tutor_join=slot.tutor_join
    )


@router.post("/{slot_id}/complaint", response_model=schemas.RefundRequest)
def learner_complain(
    slot_id: int,
    payload: schemas.ComplaintRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(deps.get_current_user_id),
):
    try:
        return attendance_service.learner_complain(
            db, user_id, slot_id, payload.evidence_url, reason=payload.reason
        )
    except BookingSlotError as exc:
        _raise_http(exc)


@router.get("/me", response_model=list[schemas.BookingPlanSlotResponse])
def list_my_slots(
    db: Session = Depends(get_db),
    user_id: int = Depends(deps.get_current_user_id),
):
    return slot_query_service.get_slots_for_user(db, user_id)


@router.get("/tutor/me", response_model=list[schemas.BookingPlanSlotResponse])
def list_my_tutor_slots(
    db: Session = Depends(get_db),
    user_id: int = Depends(deps.get_current_user_id),
):
    try:
        return slot_query_service.get_slots_for_tutor(db, user_id)
    except BookingSlotError as exc:
        _raise_http(exc)


@router.get("/tutors/{tutor_id}/paid", response_model=list[schemas.BookingPlanSlotResponse])
def list_paid_slots_by_tutor(
    tutor_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(deps.get_current_user_id),
):
    try:
        return slot_query_service.get_paid_slots_for_tutor_user(db, user_id, tutor_id)
    except BookingSlotError as exc:
        _raise_http(exc)
