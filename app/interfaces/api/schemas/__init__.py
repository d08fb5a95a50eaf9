from .activity import (
    ActivityCreate,
    ActivityImportRequest,
    ActivityImportResponse,
    ActivityRead,
    ActivitySummaryRead,
    ActivityUpdate,
    ImportSkippedRow,
    SpreadsheetRow,
    SpreadsheetUploadResponse,
    activity_fields,
)
from .audit_log import AuditLogRead
from .auth import RegisterRequest, Token
from .comment import CommentRead, CommentWrite
from .notification import (
    DispatchResultRead,
    EmailLogRead,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)
from .user import UserRead

__all__ = [
    "ActivityCreate",
    "ActivityImportRequest",
    "ActivityImportResponse",
    "ActivityRead",
    "ActivitySummaryRead",
    "ActivityUpdate",
    "AuditLogRead",
    "CommentRead",
    "CommentWrite",
    "DispatchResultRead",
    "EmailLogRead",
    "ImportSkippedRow",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "RegisterRequest",
    "SpreadsheetRow",
    "SpreadsheetUploadResponse",
    "Token",
    "UserRead",
    "activity_fields",
]
