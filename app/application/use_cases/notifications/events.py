"""Hand activity events over to the background notification queue."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.orm import Session

from app.application.errors import NotificationError
from app.domain.entities import (
    EVENT_ASSIGNED,
    EVENT_DELETED,
    EVENT_STATUS_CHANGE,
    Activity,
)
from app.infrastructure.database import SessionLocal
from app.infrastructure.email import EmailTransport
from app.infrastructure.notifications import NotificationQueue
from app.infrastructure.repositories import UserRepository

from .dispatcher import DispatchResult, NotificationDispatcher
from .messages import (
    EmailMessage,
    build_assigned_message,
    build_deleted_message,
    build_status_change_message,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityNotification:
    """Snapshot of an activity event taken right after the mutation committed."""

    event_type: str
    activity: Activity
    actor_name: str
    old_status: str | None = None
    new_status: str | None = None

    @property
    def recipient_id(self) -> int:
        return self.activity.user_id


class Notifier(Protocol):
    def notify(self, notification: ActivityNotification) -> None:
        ...


def compose_activity_message(notification: ActivityNotification, *, base_url: str) -> EmailMessage:
    activity = notification.activity
    if notification.event_type == EVENT_ASSIGNED:
        return build_assigned_message(
            activity, assigned_by=notification.actor_name, base_url=base_url
        )
    if notification.event_type == EVENT_STATUS_CHANGE:
        return build_status_change_message(
            activity,
            old_status=notification.old_status or "",
            new_status=notification.new_status or "",
            changed_by=notification.actor_name,
            base_url=base_url,
        )
    if notification.event_type == EVENT_DELETED:
        return build_deleted_message(
            activity, deleted_by=notification.actor_name, base_url=base_url
        )
    raise NotificationError(
        f"Evento de notificação sem mensagem: {notification.event_type}"
    )


class ActivityNotifier:
    """Queue activity notifications and deliver them on worker threads.

    Each job opens its own session from ``session_factory`` so it never shares
    state with the request that produced the event.
    """

    def __init__(
        self,
        *,
        transport: EmailTransport,
        queue: NotificationQueue,
        base_url: str,
        session_factory: Callable[[], Session] = SessionLocal,
    ) -> None:
        self._transport = transport
        self._queue = queue
        self._base_url = base_url
        self._session_factory = session_factory

    def notify(self, notification: ActivityNotification) -> None:
        self._queue.submit(self.deliver_now, notification)

    def deliver_now(self, notification: ActivityNotification) -> DispatchResult | None:
        session = self._session_factory()
        try:
            recipient = UserRepository(session).get(notification.recipient_id)
            if recipient is None:
                raise NotificationError(
                    f"Destinatário {notification.recipient_id} não encontrado"
                )
            message = compose_activity_message(notification, base_url=self._base_url)
            dispatcher = NotificationDispatcher(session, self._transport)
            return dispatcher.dispatch(
                recipient.id,
                notification.event_type,
                notification.activity.id,
                recipient.email,
                message.subject,
                message.html_content,
            )
        except Exception:
            logger.exception(
                "Failed to deliver %s notification for activity %s",
                notification.event_type,
                notification.activity.id,
            )
            return None
        finally:
            session.close()


def notify_safely(notifier: Notifier | None, notification: ActivityNotification) -> None:
    """Pass ``notification`` to ``notifier`` without letting failures escape."""

    if notifier is None:
        return
    try:
        notifier.notify(notification)
    except Exception:
        logger.exception(
            "Could not hand off %s notification for activity %s",
            notification.event_type,
            notification.activity.id,
        )


__all__ = [
    "ActivityNotification",
    "ActivityNotifier",
    "Notifier",
    "compose_activity_message",
    "notify_safely",
]
