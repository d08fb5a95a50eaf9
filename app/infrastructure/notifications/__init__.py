"""Background delivery helpers for the infrastructure layer."""

from .queue import (
    NotificationQueue,
    get_notification_queue,
    shutdown_notification_queue,
)

__all__ = [
    "NotificationQueue",
    "get_notification_queue",
    "shutdown_notification_queue",
]
