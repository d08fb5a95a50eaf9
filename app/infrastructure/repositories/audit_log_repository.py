"""Persistence layer for audit log records."""

import json
from typing import Any, Iterable

from sqlalchemy.orm import Session

from app.domain.entities import AuditLog
from app.infrastructure.models import AuditLogModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class AuditLogRepository:
    """Append and read :class:`AuditLog` entries. Entries are never modified."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: AuditLog) -> AuditLog:
        model = AuditLogModel()
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, entry_id: int) -> AuditLog | None:
        """Return an audit entry by its primary key, if present."""

        model = self.session.get(AuditLogModel, entry_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list(
        self,
        *,
        entity_type: str | None = None,
        entity_id: str | None = None,
        limit: int | None = None,
    ) -> list[AuditLog]:
        """Return audit entries, optionally filtered by entity."""

        query = self.session.query(AuditLogModel)
        if entity_type is not None:
            query = query.filter(AuditLogModel.entity_type == entity_type)
        if entity_id is not None:
            query = query.filter(AuditLogModel.entity_id == str(entity_id))
        query = query.order_by(AuditLogModel.id)
        if limit is not None:
            query = query.limit(limit)

        models: Iterable[AuditLogModel] = query.all()
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: AuditLogModel) -> AuditLog:
        return AuditLog(
            id=model.id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            user_id=model.user_id,
            user_email=model.user_email,
            changes=AuditLogRepository._decode_changes(model.changes),
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: AuditLogModel, entry: AuditLog) -> None:
        model.action = entry.action
        model.entity_type = entry.entity_type
        model.entity_id = str(entry.entity_id)
        model.user_id = entry.user_id
        model.user_email = entry.user_email
        model.changes = (
            json.dumps(entry.changes, default=str, ensure_ascii=False)
            if entry.changes is not None
            else None
        )
        model.created_at = (
            ensure_app_naive_datetime(entry.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )

    @staticmethod
    def _decode_changes(raw: str | None) -> dict[str, Any] | None:
        if raw in (None, ""):
            return None
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            return {"raw": raw}
        return parsed if isinstance(parsed, dict) else {"value": parsed}


__all__ = ["AuditLogRepository"]
