"""ORM models used by the application infrastructure."""

from .activity import ActivityModel
from .audit_log import AuditLogModel
from .comment import CommentModel
from .email_log import EmailLogModel
from .notification_preferences import NotificationPreferencesModel
from .user import UserModel

__all__ = [
    "ActivityModel",
    "AuditLogModel",
    "CommentModel",
    "EmailLogModel",
    "NotificationPreferencesModel",
    "UserModel",
]
