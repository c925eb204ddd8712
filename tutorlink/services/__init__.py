from . import (
    attendance_service,
    ledger_service,
    notification_service,
    reminder_service,
    slot_query_service,
)
__all__ = [
    "attendance_service",
    "ledger_service",
    "notification_service",
    "reminder_service",
    "slot_query_service",
]
