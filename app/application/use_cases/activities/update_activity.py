"""Use case for updating activities."""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import (
    ConflictError,
    DataAccessError,
    NotFoundError,
    ValidationError,
)
from app.application.use_cases.audit_logs import AuditRecorder
from app.application.use_cases.notifications.events import (
    ActivityNotification,
    Notifier,
    notify_safely,
)
from app.domain.entities import (
    AUDIT_ACTION_UPDATE,
    EVENT_STATUS_CHANGE,
    Activity,
    User,
    status_label,
)
from app.infrastructure.repositories import ActivityRepository

from .create_activity import ENTITY_TYPE
from .duplicates import DuplicateChecker, find_duplicate, store_activity
from .validators import ensure_can_modify_activity, normalize_activity_fields


def update_activity(
    session: Session,
    *,
    activity_id: int,
    actor: User,
    fields: Mapping[str, Any],
    notifier: Notifier | None,
    checker: DuplicateChecker | None = None,
) -> Activity:
    """Apply a partial update to an active activity.

    The duplicate check only runs when the title or the area actually changes,
    and it ignores the activity being edited. Any status change queues a
    ``status_change`` notification carrying both labels.
    """

    changes = normalize_activity_fields(fields, partial=True)
    if not changes:
        raise ValidationError("Nenhum campo informado para atualização")

    repository = ActivityRepository(session)
    try:
        current = repository.get(activity_id)
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao carregar a atividade") from exc
    if current is None:
        raise NotFoundError("Atividade não encontrada")
    ensure_can_modify_activity(current, actor)

    new_title = changes.get("title", current.title)
    new_area = changes.get("area", current.area)
    if new_title != current.title or new_area != current.area:
        duplicate = find_duplicate(
            session,
            current.user_id,
            new_title,
            new_area,
            exclude_id=current.id,
            checker=checker,
        )
        if duplicate is not None:
            raise ConflictError(new_title, new_area)

    try:
        updated = store_activity(session, repository.update, replace(current, **changes))
    except ConflictError:
        raise
    except ValueError as exc:
        # soft-deleted by another request after it was loaded
        raise NotFoundError("Atividade não encontrada") from exc

    AuditRecorder(session).record(
        AUDIT_ACTION_UPDATE,
        ENTITY_TYPE,
        updated.id,
        actor.id,
        actor.email,
        changes=changes,
    )

    if updated.status != current.status:
        notify_safely(
            notifier,
            ActivityNotification(
                event_type=EVENT_STATUS_CHANGE,
                activity=updated,
                actor_name=actor.display_name,
                old_status=status_label(current.status),
                new_status=status_label(updated.status),
            ),
        )
    return updated
