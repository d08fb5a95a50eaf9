"""Error types raised by the application use cases."""

from __future__ import annotations

from typing import Any


class ActivityTrackerError(Exception):
    """Base class carrying a machine readable ``kind`` and optional details."""

    kind = "error"

    def __init__(self, message: str, *, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        """Return the structured body exposed through the API."""

        payload: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(ActivityTrackerError, ValueError):
    """Input is malformed or out of range."""

    kind = "validation_error"


class ConflictError(ActivityTrackerError, ValueError):
    """An equivalent activity already exists for the same owner."""

    kind = "conflict"

    def __init__(self, title: str, area: str, *, message: str | None = None) -> None:
        self.title = title
        self.area = area
        super().__init__(
            message
            or (
                "Atividade duplicada! Já existe uma atividade com o título "
                f'"{title}" na área "{area}"'
            ),
            details={"title": title, "area": area},
        )


class NotFoundError(ActivityTrackerError, LookupError):
    """The targeted entity does not exist or was soft-deleted."""

    kind = "not_found"


class ForbiddenError(ActivityTrackerError, PermissionError):
    """The acting user lacks ownership or role for the operation."""

    kind = "forbidden"


class DataAccessError(ActivityTrackerError, RuntimeError):
    """The underlying store failed."""

    kind = "data_access_error"


class NotificationError(ActivityTrackerError):
    """Email delivery failed; only ever logged, never returned to API callers."""

    kind = "notification_error"


__all__ = [
    "ActivityTrackerError",
    "ConflictError",
    "DataAccessError",
    "ForbiddenError",
    "NotFoundError",
    "NotificationError",
    "ValidationError",
]
