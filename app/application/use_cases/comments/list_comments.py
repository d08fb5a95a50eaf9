"""Use case for listing the comments of an activity."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError
from app.domain.entities import Comment, User
from app.infrastructure.repositories import CommentRepository

from .validators import load_visible_activity


def list_comments(session: Session, *, activity_id: int, actor: User) -> list[Comment]:
    """Return the activity's comments, newest first."""

    activity = load_visible_activity(session, activity_id, actor)
    try:
        return list(CommentRepository(session).list_for_activity(activity.id))
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao buscar comentários") from exc
