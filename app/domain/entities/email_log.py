"""Domain entity recording a single email delivery attempt."""

from dataclasses import dataclass
from datetime import datetime
from typing import Final

EMAIL_STATUS_SENT: Final[str] = "sent"
EMAIL_STATUS_FAILED: Final[str] = "failed"


@dataclass
class EmailLog:
    """Outcome of one attempt to send a notification email."""

    id: int | None
    user_id: int
    email_type: str
    sent_to: str
    subject: str
    status: str
    activity_id: int | None = None
    error: str | None = None
    created_at: datetime | None = None


__all__ = ["EmailLog", "EMAIL_STATUS_FAILED", "EMAIL_STATUS_SENT"]
