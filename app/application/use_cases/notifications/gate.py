"""Per-user decision on whether a notification may be sent."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import EVENT_PREFERENCE_FIELDS
from app.infrastructure.repositories import NotificationPreferencesRepository
from app.utils import clock_label

logger = logging.getLogger(__name__)


def _minutes(label: str) -> int:
    hours, minutes = label.split(":", 1)
    return int(hours) * 60 + int(minutes)


def is_within_quiet_hours(current: str, start: str, end: str) -> bool:
    """Return whether ``current`` falls in ``[start, end)``.

    All values are ``HH:MM``. When ``start`` is later than ``end`` the window
    wraps past midnight, so ``22:00``-``06:00`` covers both 23:30 and 05:00.
    """

    now_minutes = _minutes(current)
    start_minutes = _minutes(start)
    end_minutes = _minutes(end)
    if start_minutes > end_minutes:
        return now_minutes >= start_minutes or now_minutes < end_minutes
    return start_minutes <= now_minutes < end_minutes


class NotificationGate:
    """Apply quiet hours and per-event flags stored for each user."""

    def __init__(
        self,
        session: Session,
        *,
        repository: NotificationPreferencesRepository | None = None,
    ) -> None:
        self._session = session
        self._repository = repository or NotificationPreferencesRepository(session)

    def should_notify(
        self, user_id: int, event_type: str, *, now: datetime | None = None
    ) -> bool:
        """Return ``False`` only when the user's stored preferences forbid it.

        Preferences are created with every flag enabled the first time they are
        needed. Storage errors are logged and treated as permission to send.
        """

        if event_type not in EVENT_PREFERENCE_FIELDS:
            raise ValueError(f"Unknown notification event type: {event_type}")

        try:
            preferences = self._repository.get_for_user(user_id)
            if preferences is None:
                self._repository.create_default(user_id)
                return True
        except Exception:
            self._session.rollback()
            logger.exception(
                "Could not read notification preferences for user %s; allowing %s",
                user_id,
                event_type,
            )
            return True

        if preferences.has_quiet_hours:
            try:
                quiet = is_within_quiet_hours(
                    clock_label(now),
                    preferences.quiet_hours_start,
                    preferences.quiet_hours_end,
                )
            except ValueError:
                logger.warning(
                    "Ignoring malformed quiet hours %r-%r for user %s",
                    preferences.quiet_hours_start,
                    preferences.quiet_hours_end,
                    user_id,
                )
                quiet = False
            if quiet:
                logger.info("Suppressing %s notification for user %s: quiet hours", event_type, user_id)
                return False

        return preferences.is_enabled(event_type)


__all__ = ["NotificationGate", "is_within_quiet_hours"]
