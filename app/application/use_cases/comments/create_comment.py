"""Use case for posting comments on activities."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError
from app.application.use_cases.audit_logs import AuditRecorder
from app.domain.entities import AUDIT_ACTION_CREATE, Comment, User
from app.infrastructure.repositories import CommentRepository
from app.utils import now_in_app_timezone

from .validators import load_visible_activity, normalize_content

ENTITY_TYPE = "Comment"


def create_comment(
    session: Session, *, activity_id: int, actor: User, content: str
) -> Comment:
    """Attach a comment, storing the author's current name and email on it."""

    text = normalize_content(content)
    activity = load_visible_activity(session, activity_id, actor)

    comment = Comment(
        id=None,
        activity_id=activity.id,
        content=text,
        user_id=actor.id,
        user_name=actor.display_name,
        user_email=actor.email,
        created_at=now_in_app_timezone(),
    )
    try:
        created = CommentRepository(session).create(comment)
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao salvar o comentário") from exc

    AuditRecorder(session).record(
        AUDIT_ACTION_CREATE,
        ENTITY_TYPE,
        created.id,
        actor.id,
        actor.email,
        changes={"activityId": activity.id, "content": text},
    )
    return created
