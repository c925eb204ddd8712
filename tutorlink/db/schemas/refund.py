from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel
from ..models.refund_request import RefundStatus, RefundType


class RefundRequest(BaseModel):
    id: int
    booking_plan_id: int
    slot_id: int
    user_id: int
    tutor_id: int | None = None
    refund_amount: Decimal
    status: RefundStatus
    refund_type: RefundType
    reason: str | None = None
    tutor_attend: bool | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
