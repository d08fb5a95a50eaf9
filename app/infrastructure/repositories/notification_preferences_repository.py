"""Persistence helpers for notification preferences."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreferences
from app.infrastructure.models import NotificationPreferencesModel

_MUTABLE_FIELDS = (
    "activity_assigned",
    "deadline_approaching",
    "status_changed",
    "activity_deleted",
    "daily_digest",
    "weekly_report",
    "quiet_hours_start",
    "quiet_hours_end",
)


class NotificationPreferencesRepository:
    """Provide access to the single preferences row each user owns."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, user_id: int) -> NotificationPreferences | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def create_default(self, user_id: int) -> NotificationPreferences:
        """Insert a row with every notification enabled and no quiet hours."""

        model = NotificationPreferencesModel(user_id=user_id)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_or_create(self, user_id: int) -> NotificationPreferences:
        return self.get_for_user(user_id) or self.create_default(user_id)

    def update(self, user_id: int, changes: dict[str, Any]) -> NotificationPreferences:
        model = self._get_model(user_id)
        if model is None:
            model = NotificationPreferencesModel(user_id=user_id)
        for field_name, value in changes.items():
            if field_name not in _MUTABLE_FIELDS:
                msg = f"Unknown notification preference '{field_name}'"
                raise ValueError(msg)
            setattr(model, field_name, value)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: int) -> NotificationPreferencesModel | None:
        return (
            self.session.query(NotificationPreferencesModel)
            .filter(NotificationPreferencesModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: NotificationPreferencesModel) -> NotificationPreferences:
        return NotificationPreferences(
            id=model.id,
            user_id=model.user_id,
            activity_assigned=model.activity_assigned,
            deadline_approaching=model.deadline_approaching,
            status_changed=model.status_changed,
            activity_deleted=model.activity_deleted,
            daily_digest=model.daily_digest,
            weekly_report=model.weekly_report,
            quiet_hours_start=model.quiet_hours_start,
            quiet_hours_end=model.quiet_hours_end,
        )


__all__ = ["NotificationPreferencesRepository"]
