"""Domain entity representing a strategic activity (5W2H item)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

ACTIVITY_STATUS_PENDING: Final[str] = "pending"
ACTIVITY_STATUS_IN_PROGRESS: Final[str] = "in_progress"
ACTIVITY_STATUS_COMPLETED: Final[str] = "completed"

ACTIVITY_STATUSES: Final[tuple[str, ...]] = (
    ACTIVITY_STATUS_PENDING,
    ACTIVITY_STATUS_IN_PROGRESS,
    ACTIVITY_STATUS_COMPLETED,
)

PRIORITY_HIGH: Final[int] = 0
PRIORITY_MEDIUM: Final[int] = 1
PRIORITY_LOW: Final[int] = 2

_STATUS_LABELS: Final[dict[str, str]] = {
    ACTIVITY_STATUS_PENDING: "Pendente",
    ACTIVITY_STATUS_IN_PROGRESS: "Em Andamento",
    ACTIVITY_STATUS_COMPLETED: "Concluído",
}

_PRIORITY_LABELS: Final[dict[int, str]] = {
    PRIORITY_HIGH: "Alta",
    PRIORITY_MEDIUM: "Média",
    PRIORITY_LOW: "Baixa",
}


def status_label(status: str | None) -> str:
    """Return the display label for ``status``, defaulting to ``Pendente``."""

    return _STATUS_LABELS.get(status or "", _STATUS_LABELS[ACTIVITY_STATUS_PENDING])


def priority_label(priority: int | None) -> str:
    """Return the display label for ``priority``, defaulting to ``Média``."""

    if priority is None:
        return _PRIORITY_LABELS[PRIORITY_MEDIUM]
    return _PRIORITY_LABELS.get(priority, _PRIORITY_LABELS[PRIORITY_MEDIUM])


@dataclass
class Activity:
    """Core attributes describing a tracked activity.

    The 5W2H fields map to ``title`` (what), ``description`` (why),
    ``responsible`` (who), ``deadline`` (when), ``location`` (where), ``how``
    and ``cost`` (how much). ``deadline`` and ``cost`` are free text.
    """

    id: int | None
    user_id: int
    title: str
    area: str
    priority: int
    status: str
    description: str | None = None
    responsible: str | None = None
    deadline: str | None = None
    location: str | None = None
    how: str | None = None
    cost: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


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
]
