"""Use case for soft-deleting activities."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError, NotFoundError
from app.application.use_cases.audit_logs import AuditRecorder
from app.application.use_cases.notifications.events import (
    ActivityNotification,
    Notifier,
    notify_safely,
)
from app.domain.entities import AUDIT_ACTION_DELETE, EVENT_DELETED, User
from app.infrastructure.repositories import ActivityRepository

from .create_activity import ENTITY_TYPE
from .validators import ensure_can_modify_activity


def delete_activity(
    session: Session,
    *,
    activity_id: int,
    actor: User,
    notifier: Notifier | None,
) -> None:
    """Stamp ``deleted_at`` on the activity. Rows and comments are kept."""

    repository = ActivityRepository(session)
    try:
        current = repository.get(activity_id)
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao carregar a atividade") from exc
    if current is None:
        raise NotFoundError("Atividade não encontrada")
    ensure_can_modify_activity(current, actor)

    try:
        deleted = repository.soft_delete(activity_id)
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao excluir a atividade") from exc

    AuditRecorder(session).record(
        AUDIT_ACTION_DELETE,
        ENTITY_TYPE,
        deleted.id,
        actor.id,
        actor.email,
        changes={
            "title": deleted.title,
            "area": deleted.area,
            "deletedAt": deleted.deleted_at.isoformat() if deleted.deleted_at else None,
        },
    )

    notify_safely(
        notifier,
        ActivityNotification(
            event_type=EVENT_DELETED,
            activity=deleted,
            actor_name=actor.display_name,
        ),
    )
