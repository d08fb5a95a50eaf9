"""Send notification emails and record every attempt."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import EMAIL_STATUS_FAILED, EMAIL_STATUS_SENT, EmailLog
from app.infrastructure.email import EmailTransport, TransportResult
from app.infrastructure.repositories import EmailLogRepository
from app.utils import now_in_app_timezone

from .gate import NotificationGate

logger = logging.getLogger(__name__)

SKIPPED_BY_PREFERENCES = "Notificação bloqueada pelas preferências do usuário"


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    error: str | None = None
    skipped: str | None = None
    message_id: str | None = None


class NotificationDispatcher:
    """Gate, send and log a single notification email.

    :meth:`dispatch` and :meth:`deliver` never raise for delivery problems;
    every attempt that reaches the transport writes exactly one ``EmailLog``.
    """

    def __init__(
        self,
        session: Session,
        transport: EmailTransport,
        *,
        gate: NotificationGate | None = None,
    ) -> None:
        self._session = session
        self._transport = transport
        self._gate = gate or NotificationGate(session)
        self._logs = EmailLogRepository(session)

    def dispatch(
        self,
        user_id: int,
        event_type: str,
        activity_id: int | None,
        recipient: str,
        subject: str,
        body: str,
    ) -> DispatchResult:
        if not self._gate.should_notify(user_id, event_type):
            logger.info(
                "Skipping %s email to user %s (activity %s): blocked by preferences",
                event_type,
                user_id,
                activity_id,
            )
            return DispatchResult(success=False, skipped=SKIPPED_BY_PREFERENCES)
        return self.deliver(user_id, event_type, activity_id, recipient, subject, body)

    def deliver(
        self,
        user_id: int,
        event_type: str,
        activity_id: int | None,
        recipient: str,
        subject: str,
        body: str,
    ) -> DispatchResult:
        try:
            result = self._transport.send(recipient, subject, body)
        except Exception as exc:
            logger.exception("Email transport raised while sending %s to %s", event_type, recipient)
            result = TransportResult(error=str(exc) or exc.__class__.__name__)

        self._record(
            EmailLog(
                id=None,
                user_id=user_id,
                email_type=event_type,
                sent_to=recipient,
                subject=subject,
                status=EMAIL_STATUS_SENT if result.ok else EMAIL_STATUS_FAILED,
                activity_id=activity_id,
                error=result.error,
                created_at=now_in_app_timezone(),
            )
        )

        if result.ok:
            return DispatchResult(success=True, message_id=result.message_id)
        logger.warning("Email %s to %s failed: %s", event_type, recipient, result.error)
        return DispatchResult(success=False, error=result.error)

    def _record(self, entry: EmailLog) -> None:
        try:
            self._logs.create(entry)
        except SQLAlchemyError:
            self._session.rollback()
            logger.exception("Failed to record email log for %s", entry.sent_to)


__all__ = ["DispatchResult", "NotificationDispatcher", "SKIPPED_BY_PREFERENCES"]
