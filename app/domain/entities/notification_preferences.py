"""Domain entity describing per-user email notification preferences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

EVENT_ASSIGNED: Final[str] = "assigned"
EVENT_DEADLINE: Final[str] = "deadline"
EVENT_STATUS_CHANGE: Final[str] = "status_change"
EVENT_DELETED: Final[str] = "deleted"
EVENT_DIGEST: Final[str] = "digest"
EVENT_REPORT: Final[str] = "report"

# Event type -> preference attribute holding its on/off flag.
EVENT_PREFERENCE_FIELDS: Final[dict[str, str]] = {
    EVENT_ASSIGNED: "activity_assigned",
    EVENT_DEADLINE: "deadline_approaching",
    EVENT_STATUS_CHANGE: "status_changed",
    EVENT_DELETED: "activity_deleted",
    EVENT_DIGEST: "daily_digest",
    EVENT_REPORT: "weekly_report",
}


@dataclass
class NotificationPreferences:
    """Flags per event type plus an optional quiet-hours window (``HH:MM``)."""

    id: int | None
    user_id: int
    activity_assigned: bool = True
    deadline_approaching: bool = True
    status_changed: bool = True
    activity_deleted: bool = True
    daily_digest: bool = True
    weekly_report: bool = True
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None

    def is_enabled(self, event_type: str) -> bool:
        """Return the stored flag for ``event_type``."""

        try:
            field_name = EVENT_PREFERENCE_FIELDS[event_type]
        except KeyError as exc:
            raise ValueError(f"Unknown notification event type: {event_type}") from exc
        return bool(getattr(self, field_name))

    @property
    def has_quiet_hours(self) -> bool:
        return bool(self.quiet_hours_start and self.quiet_hours_end)


__all__ = [
    "EVENT_ASSIGNED",
    "EVENT_DEADLINE",
    "EVENT_DELETED",
    "EVENT_DIGEST",
    "EVENT_PREFERENCE_FIELDS",
    "EVENT_REPORT",
    "EVENT_STATUS_CHANGE",
    "NotificationPreferences",
]
