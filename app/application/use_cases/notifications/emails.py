"""Emails the current user asks for directly: the daily digest and a test."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError
from app.domain.entities import (
    ACTIVITY_STATUS_COMPLETED,
    ACTIVITY_STATUS_IN_PROGRESS,
    ACTIVITY_STATUS_PENDING,
    EVENT_ASSIGNED,
    EVENT_DIGEST,
    PRIORITY_HIGH,
    EmailLog,
    User,
)
from app.infrastructure.email import EmailTransport
from app.infrastructure.repositories import ActivityRepository, EmailLogRepository

from .dispatcher import DispatchResult, NotificationDispatcher
from .messages import DigestCounts, build_digest_message, build_test_message

DIGEST_LIST_LIMIT = 10


def send_daily_digest(
    session: Session,
    *,
    user: User,
    transport: EmailTransport,
    base_url: str,
) -> DispatchResult:
    """Summarize the user's open work and dispatch it, honouring preferences."""

    repository = ActivityRepository(session)
    try:
        by_status = repository.count_by("status", owner_id=user.id)
        activities = repository.list(owner_id=user.id)
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao montar o resumo diário") from exc

    open_activities = [
        activity for activity in activities if activity.status != ACTIVITY_STATUS_COMPLETED
    ]
    high_priority = [
        activity for activity in open_activities if activity.priority == PRIORITY_HIGH
    ]
    with_deadline = [activity for activity in open_activities if activity.deadline]

    message = build_digest_message(
        user_name=user.display_name,
        counts=DigestCounts(
            pending=by_status.get(ACTIVITY_STATUS_PENDING, 0),
            in_progress=by_status.get(ACTIVITY_STATUS_IN_PROGRESS, 0),
            completed=by_status.get(ACTIVITY_STATUS_COMPLETED, 0),
        ),
        high_priority=high_priority[:DIGEST_LIST_LIMIT],
        with_deadline=with_deadline[:DIGEST_LIST_LIMIT],
        base_url=base_url,
    )
    dispatcher = NotificationDispatcher(session, transport)
    return dispatcher.dispatch(
        user.id, EVENT_DIGEST, None, user.email, message.subject, message.html_content
    )


def send_test_email(
    session: Session,
    *,
    user: User,
    transport: EmailTransport,
    base_url: str,
) -> DispatchResult:
    """Deliver a test message to ``user`` without consulting preferences."""

    message = build_test_message(user_name=user.display_name, base_url=base_url)
    dispatcher = NotificationDispatcher(session, transport)
    return dispatcher.deliver(
        user.id, EVENT_ASSIGNED, None, user.email, message.subject, message.html_content
    )


def list_email_logs(session: Session, *, user_id: int, limit: int | None = 50) -> list[EmailLog]:
    """Return the most recent delivery attempts addressed to ``user_id``."""

    try:
        return list(EmailLogRepository(session).list_for_user(user_id, limit=limit))
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao consultar o histórico de e-mails") from exc


__all__ = ["DIGEST_LIST_LIMIT", "list_email_logs", "send_daily_digest", "send_test_email"]
