"""Schemas for audit log endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AuditLogRead(BaseModel):
    """Representation of an audit log entry returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    action: str
    entity_type: str
    entity_id: str
    user_id: int
    user_email: str
    changes: dict[str, Any] | None
    created_at: datetime | None


__all__ = ["AuditLogRead"]
