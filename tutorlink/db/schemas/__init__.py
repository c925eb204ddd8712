from .slot import BookingPlanSlotResponse
from .attendance import AttendanceResult, ComplaintRequest, EvidenceRequest
from .refund import RefundRequest
