"""Use case for retrieving a single activity."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError, ForbiddenError, NotFoundError
from app.domain.entities import Activity, User
from app.infrastructure.repositories import ActivityRepository

from .validators import can_modify_activity


def get_activity(
    session: Session,
    *,
    activity_id: int,
    actor: User,
    include_deleted: bool = False,
) -> Activity:
    """Return an activity visible to ``actor``.

    Soft-deleted rows are only returned when ``include_deleted`` is set.
    """

    try:
        activity = ActivityRepository(session).get(
            activity_id, include_deleted=include_deleted
        )
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao carregar a atividade") from exc
    if activity is None:
        raise NotFoundError("Atividade não encontrada")
    if not can_modify_activity(activity, actor):
        raise ForbiddenError("Você não tem permissão para acessar esta atividade")
    return activity
