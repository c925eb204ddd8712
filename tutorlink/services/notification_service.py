from __future__ import annotations

import logging

import httpx
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import get_settings
from ..db import models
from ..db.models.notification import NotificationKind

logger = logging.getLogger(__name__)


def send_notification(
    db: Session,
    user_id: int,
    title: str,
    content: str,
    kind: NotificationKind,
    primary_action_url: str | None = None,
) -> models.Notification:
    """Record an in-app notification and push it to the configured endpoint.

    The row is flushed but not committed: the caller owns the unit of work and
    rolls it back when delivery fails. Push errors are raised to the caller.
    """

    notification = models.Notification(
        user_id=user_id,
        title=title,
        content=content,
        kind=kind,
        primary_action_url=primary_action_url,
        is_read=False,
    )
    db.add(notification)
    db.flush()

    settings = get_settings()
    if settings.notification_push_url:
        with httpx.Client(timeout=settings.notification_push_timeout) as client:
            response = client.post(
                settings.notification_push_url,
                json={
                    "user_id": user_id,
                    "title": title,
                    "content": content,
                    "kind": kind.value,
                    "url": primary_action_url,
                },
            )
            response.raise_for_status()
    logger.debug(
        "Notification queued",
        extra={"user_id": user_id, "kind": kind.value, "notification_id": notification.id},
    )
    return notification


def list_for_user(db: Session, user_id: int) -> list[models.Notification]:
    return list(
        db.scalars(
            select(models.Notification)
            .where(models.Notification.user_id == user_id)
            .order_by(models.Notification.created_at.desc(), models.Notification.id.desc())
        )
    )


__all__ = ["send_notification", "list_for_user"]
