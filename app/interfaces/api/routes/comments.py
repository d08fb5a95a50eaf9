"""Rotas para comentários das atividades."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.errors import ActivityTrackerError
from app.application.use_cases.comments import (
    create_comment as create_comment_uc,
    delete_comment as delete_comment_uc,
    list_comments as list_comments_uc,
    update_comment as update_comment_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_active_user
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import CommentRead, CommentWrite

router = APIRouter(tags=["comments"])


@router.get("/activities/{activity_id}/comments", response_model=list[CommentRead])
def list_comments(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[CommentRead]:
    """Lista os comentários da atividade, do mais recente ao mais antigo."""

    try:
        comments = list_comments_uc(db, activity_id=activity_id, actor=current_user)
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return [CommentRead.model_validate(comment) for comment in comments]


@router.post(
    "/activities/{activity_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    activity_id: int,
    payload: CommentWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CommentRead:
    try:
        comment = create_comment_uc(
            db, activity_id=activity_id, actor=current_user, content=payload.content
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return CommentRead.model_validate(comment)


@router.put("/comments/{comment_id}", response_model=CommentRead)
def update_comment(
    comment_id: int,
    payload: CommentWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CommentRead:
    """Edita um comentário. Apenas o autor ou um administrador pode editar."""

    try:
        comment = update_comment_uc(
            db, comment_id=comment_id, actor=current_user, content=payload.content
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return CommentRead.model_validate(comment)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    try:
        delete_comment_uc(db, comment_id=comment_id, actor=current_user)
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
