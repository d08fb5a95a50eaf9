"""Pydantic models describing notification preferences and deliveries."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationPreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    activity_assigned: bool
    deadline_approaching: bool
    status_changed: bool
    activity_deleted: bool
    daily_digest: bool
    weekly_report: bool
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None


class NotificationPreferencesUpdate(BaseModel):
    """Partial update; an empty quiet-hours string clears the value."""

    model_config = ConfigDict(extra="forbid")

    activity_assigned: bool | None = None
    deadline_approaching: bool | None = None
    status_changed: bool | None = None
    activity_deleted: bool | None = None
    daily_digest: bool | None = None
    weekly_report: bool | None = None
    quiet_hours_start: str | None = Field(default=None, max_length=5, description="HH:MM")
    quiet_hours_end: str | None = Field(default=None, max_length=5, description="HH:MM")


class EmailLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    email_type: str
    activity_id: int | None
    sent_to: str
    subject: str
    status: str
    error: str | None
    created_at: datetime | None


class DispatchResultRead(BaseModel):
    success: bool
    message: str
    error: str | None = None
    skipped: str | None = None


__all__ = [
    "DispatchResultRead",
    "EmailLogRead",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
]
