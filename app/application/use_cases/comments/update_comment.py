"""Use case for editing comments."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError
from app.application.use_cases.audit_logs import AuditRecorder
from app.domain.entities import AUDIT_ACTION_UPDATE, Comment, User
from app.infrastructure.repositories import CommentRepository

from .create_comment import ENTITY_TYPE
from .ownership import ensure_can_mutate
from .validators import load_comment, normalize_content


def update_comment(
    session: Session, *, comment_id: int, actor: User, content: str
) -> Comment:
    text = normalize_content(content)
    current = load_comment(session, comment_id)
    ensure_can_mutate(current, actor)

    try:
        updated = CommentRepository(session).update_content(comment_id, text)
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao atualizar o comentário") from exc

    AuditRecorder(session).record(
        AUDIT_ACTION_UPDATE,
        ENTITY_TYPE,
        updated.id,
        actor.id,
        actor.email,
        changes={"activityId": updated.activity_id, "content": text},
    )
    return updated
