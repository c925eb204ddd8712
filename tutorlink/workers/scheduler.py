import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ..config import get_settings
from ..db.session import SessionLocal
from ..services import attendance_service, reminder_service

logger = logging.getLogger(__name__)


def send_reminders() -> None:
    with SessionLocal() as db:
        sent = reminder_service.send_tutor_reminders_for_upcoming_slots(db)
        if sent:
            logger.info("Booking reminders sent", extra={"slots": sent})


def auto_confirm_learners() -> None:
    with SessionLocal() as db:
        updated = attendance_service.auto_confirm_learner_joins(db)
        if updated:
            logger.info("Learner joins auto-confirmed", extra={"slots": updated})


def get_scheduler() -> AsyncIOScheduler:
    settings = get_settings()
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        send_reminders,
        "interval",
        seconds=settings.reminder_interval_seconds,
        id="booking_reminders",
        max_instances=1,
        coalesce=True,
    )
    scheduler.add_job(
        auto_confirm_learners,
        "interval",
        minutes=settings.auto_confirm_interval_minutes,
        id="auto_confirm_learners",
        max_instances=1,
        coalesce=True,
    )
    return scheduler
