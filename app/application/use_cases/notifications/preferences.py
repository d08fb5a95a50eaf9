"""Use cases for reading and editing notification preferences."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError, ValidationError
from app.domain.entities import EVENT_PREFERENCE_FIELDS, NotificationPreferences
from app.infrastructure.repositories import NotificationPreferencesRepository

QUIET_HOURS_PATTERN: Final[re.Pattern[str]] = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_FLAG_FIELDS: Final[frozenset[str]] = frozenset(EVENT_PREFERENCE_FIELDS.values())
_QUIET_HOURS_FIELDS: Final[tuple[str, ...]] = ("quiet_hours_start", "quiet_hours_end")


def get_notification_preferences(session: Session, *, user_id: int) -> NotificationPreferences:
    """Return the user's preferences, creating the defaults on first access."""

    try:
        return NotificationPreferencesRepository(session).get_or_create(user_id)
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao carregar preferências de notificação") from exc


def _normalize_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    errors: dict[str, str] = {}
    normalized: dict[str, Any] = {}
    for name, value in changes.items():
        if value is None:
            continue
        if name in _FLAG_FIELDS:
            if not isinstance(value, bool):
                errors[name] = "Valor deve ser verdadeiro ou falso"
            else:
                normalized[name] = value
        elif name in _QUIET_HOURS_FIELDS:
            text = str(value).strip()
            if not text:
                normalized[name] = None
            elif not QUIET_HOURS_PATTERN.match(text):
                errors[name] = "Formato inválido. Use HH:MM"
            else:
                normalized[name] = text
        else:
            errors[name] = "Campo não permitido"
    if errors:
        raise ValidationError("Preferências de notificação inválidas", details=errors)
    return normalized


def update_notification_preferences(
    session: Session, *, user_id: int, changes: Mapping[str, Any]
) -> NotificationPreferences:
    """Apply a partial update. ``None`` leaves a field untouched and an empty
    quiet-hours string clears it."""

    normalized = _normalize_changes(changes)
    repository = NotificationPreferencesRepository(session)
    try:
        if not normalized:
            return repository.get_or_create(user_id)
        return repository.update(user_id, normalized)
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao salvar preferências de notificação") from exc


__all__ = [
    "QUIET_HOURS_PATTERN",
    "get_notification_preferences",
    "update_notification_preferences",
]
