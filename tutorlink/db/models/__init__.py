from .user import User
from .tutor import Tutor
from .booking_plan import BookingPlan
from .booking_plan_slot import BookingPlanSlot, SlotStatus
from .payment import Payment, PaymentStatus, PaymentType
from .refund_request import ACTIVE_REFUND_STATUSES, RefundRequest, RefundStatus, RefundType
from .notification import Notification, NotificationKind
