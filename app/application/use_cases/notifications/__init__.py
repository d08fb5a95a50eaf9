"""Use cases that decide on, compose and deliver email notifications."""

from .dispatcher import DispatchResult, NotificationDispatcher
from .emails import list_email_logs, send_daily_digest, send_test_email
from .events import (
    ActivityNotification,
    ActivityNotifier,
    Notifier,
    compose_activity_message,
    notify_safely,
)
from .gate import NotificationGate, is_within_quiet_hours
from .preferences import get_notification_preferences, update_notification_preferences

__all__ = [
    "ActivityNotification",
    "ActivityNotifier",
    "DispatchResult",
    "NotificationDispatcher",
    "NotificationGate",
    "Notifier",
    "compose_activity_message",
    "get_notification_preferences",
    "is_within_quiet_hours",
    "list_email_logs",
    "notify_safely",
    "send_daily_digest",
    "send_test_email",
    "update_notification_preferences",
]
