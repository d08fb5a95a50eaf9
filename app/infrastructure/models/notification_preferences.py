"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.sql import expression

from app.infrastructure.database import Base


def _enabled_flag() -> Column:
    return Column(Boolean, nullable=False, default=True, server_default=expression.true())


class NotificationPreferencesModel(Base):
    """Database representation of the notification settings of a user."""

    __tablename__ = "notification_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, unique=True)
    activity_assigned = _enabled_flag()
    deadline_approaching = _enabled_flag()
    status_changed = _enabled_flag()
    activity_deleted = _enabled_flag()
    daily_digest = _enabled_flag()
    weekly_report = _enabled_flag()
    quiet_hours_start = Column(String(5), nullable=True)
    quiet_hours_end = Column(String(5), nullable=True)


__all__ = ["NotificationPreferencesModel"]
