"""Use case computing the dashboard counters of a user."""

from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError
from app.domain.entities import (
    ACTIVITY_STATUSES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
)
from app.infrastructure.repositories import ActivityRepository


@dataclass
class ActivitySummary:
    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    by_priority: dict[int, int] = field(default_factory=dict)
    by_area: dict[str, int] = field(default_factory=dict)


def summarize_activities(session: Session, *, owner_id: int) -> ActivitySummary:
    """Count the owner's active activities by status, priority and area."""

    repository = ActivityRepository(session)
    try:
        by_status = repository.count_by("status", owner_id=owner_id)
        by_priority = repository.count_by("priority", owner_id=owner_id)
        by_area = repository.count_by("area", owner_id=owner_id)
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao calcular o resumo de atividades") from exc

    return ActivitySummary(
        total=sum(by_status.values()),
        by_status={status: by_status.get(status, 0) for status in ACTIVITY_STATUSES},
        by_priority={
            priority: by_priority.get(priority, 0)
            for priority in (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)
        },
        by_area=dict(sorted(by_area.items(), key=lambda item: (-item[1], str(item[0])))),
    )
