"""Use case for removing comments."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError, NotFoundError
from app.application.use_cases.audit_logs import AuditRecorder
from app.domain.entities import AUDIT_ACTION_DELETE, User
from app.infrastructure.repositories import CommentRepository

from .create_comment import ENTITY_TYPE
from .ownership import ensure_can_mutate
from .validators import load_comment


def delete_comment(session: Session, *, comment_id: int, actor: User) -> None:
    """Physically delete a comment. Only its author or an admin may do so."""

    current = load_comment(session, comment_id)
    ensure_can_mutate(current, actor)

    try:
        removed = CommentRepository(session).delete(comment_id)
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao excluir o comentário") from exc
    if not removed:
        raise NotFoundError("Comentário não encontrado")

    AuditRecorder(session).record(
        AUDIT_ACTION_DELETE,
        ENTITY_TYPE,
        comment_id,
        actor.id,
        actor.email,
        changes={"activityId": current.activity_id, "content": current.content},
    )
