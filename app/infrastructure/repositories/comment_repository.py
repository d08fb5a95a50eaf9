"""Persistence layer for activity comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.domain.entities import Comment
from app.infrastructure.models import CommentModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class CommentRepository:
    """Provide CRUD operations for :class:`Comment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_activity(self, activity_id: int) -> Sequence[Comment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.activity_id == activity_id)
            .order_by(desc(CommentModel.created_at), desc(CommentModel.id))
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, comment_id: int) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._to_entity(model) if model else None

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            activity_id=comment.activity_id,
            user_id=comment.user_id,
            content=comment.content,
            user_name=comment.user_name,
            user_email=comment.user_email,
        )
        if comment.created_at is not None:
            model.created_at = ensure_app_naive_datetime(comment.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_content(self, comment_id: int, content: str) -> Comment:
        model = self.session.get(CommentModel, comment_id)
        if model is None:
            msg = f"Comment with id {comment_id} not found"
            raise ValueError(msg)
        model.content = content
        model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, comment_id: int) -> bool:
        """Remove the comment; returns ``False`` when it did not exist."""

        model = self.session.get(CommentModel, comment_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            activity_id=model.activity_id,
            content=model.content,
            user_id=model.user_id,
            user_name=model.user_name,
            user_email=model.user_email,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["CommentRepository"]
