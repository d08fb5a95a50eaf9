"""Repository implementations for infrastructure layer."""

from .activity_repository import ActivityRepository
from .audit_log_repository import AuditLogRepository
from .comment_repository import CommentRepository
from .email_log_repository import EmailLogRepository
from .notification_preferences_repository import NotificationPreferencesRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "AuditLogRepository",
    "CommentRepository",
    "EmailLogRepository",
    "NotificationPreferencesRepository",
    "UserRepository",
]
