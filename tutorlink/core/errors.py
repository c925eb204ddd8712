"""Errors raised by the booking-slot services.

Every error carries the HTTP status the API layer answers with, so routes
can translate them without knowing the concrete subclass.
"""

from fastapi import status


class BookingSlotError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message = "Booking slot operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(BookingSlotError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class SlotNotFound(NotFoundError):
    default_message = "Booking slot not found"


class PlanNotFound(NotFoundError):
    default_message = "Booking plan not found"


class PaymentNotFound(NotFoundError):
    default_message = "Payment not found"


class TutorNotFound(NotFoundError):
    default_message = "Tutor not found"


class UnauthorizedError(BookingSlotError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission"


class InvalidStateError(BookingSlotError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Booking slot is not paid"


__all__ = [
    "BookingSlotError",
    "NotFoundError",
    "SlotNotFound",
    "PlanNotFound",
    "PaymentNotFound",
    "TutorNotFound",
    "UnauthorizedError",
    "InvalidStateError",
]
