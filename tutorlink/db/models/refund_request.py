from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base


class RefundStatus(str, PyEnum):
    pending = "pending"
    submitted = "submitted"
    approved = "approved"
    rejected = "rejected"


class RefundType(str, PyEnum):
    complaint = "complaint"


class RefundRequest(Base):
    __tablename__ = "refund_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    booking_plan_id: Mapped[int] = mapped_column(ForeignKey("booking_plans.id"))
    slot_id: Mapped[int] = mapped_column(ForeignKey("booking_plan_slots.id"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    tutor_id: Mapped[int | None] = mapped_column(ForeignKey("tutors.id"))
    refund_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    status: Mapped[RefundStatus] = mapped_column(Enum(RefundStatus), default=RefundStatus.pending)
    refund_type: Mapped[RefundType] = mapped_column(Enum(RefundType), default=RefundType.complaint)
    reason: Mapped[str | None] = mapped_column(String(1024))
    tutor_attend: Mapped[bool | None] = mapped_column(Boolean)
    tutor_responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


ACTIVE_REFUND_STATUSES = (RefundStatus.pending, RefundStatus.submitted)
