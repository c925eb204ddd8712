from datetime import datetime
from decimal import Decimal
from enum import Enum as PyEnum
from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base


class PaymentType(str, PyEnum):
    course = "course"
    booking = "booking"


class PaymentStatus(str, PyEnum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    tutor_id: Mapped[int | None] = mapped_column(ForeignKey("tutors.id"), index=True)
    payment_type: Mapped[PaymentType] = mapped_column(Enum(PaymentType))
    status: Mapped[PaymentStatus] = mapped_column(Enum(PaymentStatus), default=PaymentStatus.pending)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    # commission-free amount snapshotted when the payment was captured
    net_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
