"""Domain entity representing an append-only audit entry."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Final

AUDIT_ACTION_CREATE: Final[str] = "CREATE"
AUDIT_ACTION_UPDATE: Final[str] = "UPDATE"
AUDIT_ACTION_DELETE: Final[str] = "DELETE"

AUDIT_ACTIONS: Final[tuple[str, ...]] = (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_UPDATE,
    AUDIT_ACTION_DELETE,
)


@dataclass
class AuditLog:
    """Captured information about a mutation performed by a user."""

    id: int | None
    action: str
    entity_type: str
    entity_id: str
    user_id: int
    user_email: str
    changes: dict[str, Any] | None
    created_at: datetime | None


__all__ = [
    "AuditLog",
    "AUDIT_ACTIONS",
    "AUDIT_ACTION_CREATE",
    "AUDIT_ACTION_DELETE",
    "AUDIT_ACTION_UPDATE",
]
