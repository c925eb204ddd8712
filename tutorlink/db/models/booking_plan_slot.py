from datetime import datetime, timedelta
from enum import Enum as PyEnum
from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base


class SlotStatus(str, PyEnum):
    available = "available"
    locked = "locked"
    paid = "paid"
    canceled = "canceled"


class BookingPlanSlot(Base):
    __tablename__ = "booking_plan_slots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"), index=True)
    tutor_id: Mapped[int] = mapped_column(ForeignKey("tutors.id"), index=True)
    booking_plan_id: Mapped[int | None] = mapped_column(ForeignKey("booking_plans.id"))
    payment_id: Mapped[int | None] = mapped_column(ForeignKey("payments.id"), index=True)
    status: Mapped[SlotStatus] = mapped_column(Enum(SlotStatus), default=SlotStatus.available)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    learner_join: Mapped[bool] = mapped_column(Boolean, default=False)
    learner_evidence: Mapped[str | None] = mapped_column(String(1024))
    tutor_join: Mapped[bool] = mapped_column(Boolean, default=False)
    tutor_evidence: Mapped[str | None] = mapped_column(String(1024))
    reminder_sent: Mapped[bool] = mapped_column(Boolean, default=False)

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def fully_confirmed(self) -> bool:
        return self.status == SlotStatus.paid and bool(self.tutor_join) and bool(self.learner_join)
