"""Thin data-access helpers used by the booking-slot services.

Each module mirrors one store: lookups return ``None`` or lists and never
raise for missing rows, so the services decide which absence is an error.
"""

from . import payments, plans, refunds, slots, tutors

__all__ = ["payments", "plans", "refunds", "slots", "tutors"]
