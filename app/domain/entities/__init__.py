"""Domain entities exposed by the application."""

from .activity import (
    ACTIVITY_STATUSES,
    ACTIVITY_STATUS_COMPLETED,
    ACTIVITY_STATUS_IN_PROGRESS,
    ACTIVITY_STATUS_PENDING,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Activity,
    priority_label,
    status_label,
)
from .audit_log import (
    AUDIT_ACTIONS,
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_UPDATE,
    AuditLog,
)
from .comment import Comment
from .email_log import EMAIL_STATUS_FAILED, EMAIL_STATUS_SENT, EmailLog
from .notification_preferences import (
    EVENT_ASSIGNED,
    EVENT_DEADLINE,
    EVENT_DELETED,
    EVENT_DIGEST,
    EVENT_PREFERENCE_FIELDS,
    EVENT_REPORT,
    EVENT_STATUS_CHANGE,
    NotificationPreferences,
)
from .role import UserRole
from .user import User

__all__ = [
    "Activity",
    "ACTIVITY_STATUSES",
    "ACTIVITY_STATUS_COMPLETED",
    "ACTIVITY_STATUS_IN_PROGRESS",
    "ACTIVITY_STATUS_PENDING",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "priority_label",
    "status_label",
    "AuditLog",
    "AUDIT_ACTIONS",
    "AUDIT_ACTION_CREATE",
    "AUDIT_ACTION_DELETE",
    "AUDIT_ACTION_UPDATE",
    "Comment",
    "EmailLog",
    "EMAIL_STATUS_FAILED",
    "EMAIL_STATUS_SENT",
    "NotificationPreferences",
    "EVENT_ASSIGNED",
    "EVENT_DEADLINE",
    "EVENT_DELETED",
    "EVENT_DIGEST",
    "EVENT_PREFERENCE_FIELDS",
    "EVENT_REPORT",
    "EVENT_STATUS_CHANGE",
    "User",
    "UserRole",
]
