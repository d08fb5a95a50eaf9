"""Who may change or remove a comment."""

from app.application.errors import ForbiddenError
from app.domain.entities import Comment, User


def can_mutate(comment: Comment, actor: User) -> bool:
    """Return ``True`` for the comment's author and for any administrator."""

    return comment.user_id == actor.id or actor.is_admin()


def ensure_can_mutate(comment: Comment, actor: User) -> None:
    if not can_mutate(comment, actor):
        raise ForbiddenError("Você não tem permissão para alterar este comentário")


__all__ = ["can_mutate", "ensure_can_mutate"]
