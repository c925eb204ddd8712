from . import (
    booking_slots,
    misc,
)

__all__ = [
    "booking_slots",
    "misc",
]
