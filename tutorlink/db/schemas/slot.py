from datetime import datetime
from pydantic import BaseModel


class BookingPlanSlotResponse(BaseModel):
    slot_id: int
    booking_plan_id: int | None = None
    tutor_id: int
    user_id: int | None = None
    payment_id: int | None = None
    status: str
    start_time: datetime
    end_time: datetime
    learner_join: bool = False
    tutor_join: bool = False
    learner_evidence: str | None = None
    tutor_evidence: str | None = None
    meeting_url: str | None = None
    tutor_full_name: str | None = None
