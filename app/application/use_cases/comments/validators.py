"""Validation helpers for comment use cases."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError, NotFoundError, ValidationError
from app.application.use_cases.activities import get_activity
from app.domain.entities import Activity, Comment, User
from app.infrastructure.repositories import CommentRepository

MAX_COMMENT_LENGTH = 5000


def normalize_content(content: str | None) -> str:
    """Return the trimmed content or raise :class:`ValidationError`."""

    text = (content or "").strip()
    if not text:
        raise ValidationError(
            "Comentário não pode estar vazio", details={"content": "Campo obrigatório"}
        )
    if len(text) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f"Comentário deve ter no máximo {MAX_COMMENT_LENGTH} caracteres",
            details={"content": f"Máximo de {MAX_COMMENT_LENGTH} caracteres"},
        )
    return text


def load_visible_activity(session: Session, activity_id: int, actor: User) -> Activity:
    """Return the active activity if ``actor`` owns it or is an administrator."""

    return get_activity(session, activity_id=activity_id, actor=actor)


def load_comment(session: Session, comment_id: int) -> Comment:
    try:
        comment = CommentRepository(session).get(comment_id)
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao carregar o comentário") from exc
    if comment is None:
        raise NotFoundError("Comentário não encontrado")
    return comment
