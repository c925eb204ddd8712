"""Common application-wide constants."""

# Deep links embedded in user-facing notifications
LEARNER_REFUND_URL = "/learner/refunds/{refund_request_id}"
TUTOR_REFUND_URL = "/tutor/refunds/{refund_request_id}"
TUTOR_REMINDER_URL = "/booked-slots"
LEARNER_REMINDER_URL = "/my-bookings"

REMINDER_TITLE = "Your 1-1 session starts soon"
COMPLAINT_RECEIVED_TITLE = "Your complaint has been recorded"
COMPLAINT_TO_TUTOR_TITLE = "A learner filed a complaint about your session"

DEFAULT_TUTOR_NAME = "Tutor"


__all__ = [
    "LEARNER_REFUND_URL",
    "TUTOR_REFUND_URL",
    "TUTOR_REMINDER_URL",
    "LEARNER_REMINDER_URL",
    "REMINDER_TITLE",
    "COMPLAINT_RECEIVED_TITLE",
    "COMPLAINT_TO_TUTOR_TITLE",
    "DEFAULT_TUTOR_NAME",
]
