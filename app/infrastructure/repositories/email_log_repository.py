"""Persistence helpers for email delivery logs."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import EmailLog
from app.infrastructure.models import EmailLogModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class EmailLogRepository:
    """Append-only store of :class:`EmailLog` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: EmailLog) -> EmailLog:
        model = EmailLogModel(
            user_id=entry.user_id,
            email_type=entry.email_type,
            activity_id=entry.activity_id,
            sent_to=entry.sent_to,
            subject=entry.subject[:255],
            status=entry.status,
            error=entry.error,
            created_at=ensure_app_naive_datetime(entry.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(self, user_id: int, *, limit: int | None = 50) -> Sequence[EmailLog]:
        query = (
            self.session.query(EmailLogModel)
            .filter(EmailLogModel.user_id == user_id)
            .order_by(EmailLogModel.created_at.desc(), EmailLogModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: EmailLogModel) -> EmailLog:
        return EmailLog(
            id=model.id,
            user_id=model.user_id,
            email_type=model.email_type,
            activity_id=model.activity_id,
            sent_to=model.sent_to,
            subject=model.subject,
            status=model.status,
            error=model.error,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["EmailLogRepository"]
