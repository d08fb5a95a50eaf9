"""Use cases for recording and reading audit log entries."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError
from app.domain.entities import AUDIT_ACTIONS, AuditLog
from app.infrastructure.repositories import AuditLogRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Append audit entries without ever failing the mutation being audited.

    Every mutation commits before it is audited, so a failing audit insert is
    rolled back on its own and reported through the log only.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._repository = AuditLogRepository(session)

    def record(
        self,
        action: str,
        entity_type: str,
        entity_id: int | str,
        actor_id: int,
        actor_email: str,
        changes: dict[str, Any] | None = None,
    ) -> AuditLog | None:
        if action not in AUDIT_ACTIONS:
            raise ValueError(f"Unknown audit action: {action}")

        entry = AuditLog(
            id=None,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id),
            user_id=actor_id,
            user_email=actor_email,
            changes=changes,
            created_at=now_in_app_timezone(),
        )
        try:
            return self._repository.create(entry)
        except Exception:
            self._session.rollback()
            logger.exception(
                "Failed to record audit entry %s %s#%s by user %s",
                action,
                entity_type,
                entity_id,
                actor_id,
            )
            return None


def list_audit_logs(
    session: Session,
    *,
    entity_type: str | None = None,
    entity_id: int | str | None = None,
    limit: int | None = None,
) -> list[AuditLog]:
    """Return audit entries, oldest first, optionally filtered by entity."""

    repository = AuditLogRepository(session)
    try:
        return repository.list(
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            limit=limit,
        )
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao consultar o histórico de auditoria") from exc


__all__ = ["AuditRecorder", "list_audit_logs"]
