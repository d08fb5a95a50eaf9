"""Use case for creating activities."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.application.errors import ConflictError
from app.application.use_cases.audit_logs import AuditRecorder
from app.application.use_cases.notifications.events import (
    ActivityNotification,
    Notifier,
    notify_safely,
)
from app.domain.entities import AUDIT_ACTION_CREATE, EVENT_ASSIGNED, Activity, User
from app.infrastructure.repositories import ActivityRepository
from app.utils import now_in_app_timezone

from .duplicates import DuplicateChecker, find_duplicate, store_activity
from .validators import normalize_activity_fields

ENTITY_TYPE = "Activity"


def create_activity(
    session: Session,
    *,
    owner: User,
    fields: Mapping[str, Any],
    notifier: Notifier | None,
    checker: DuplicateChecker | None = None,
) -> Activity:
    """Create an activity for ``owner`` rejecting case-insensitive duplicates.

    An ``assigned`` notification is queued when a responsible person is set.
    """

    values = normalize_activity_fields(fields)

    if find_duplicate(session, owner.id, values["title"], values["area"], checker=checker):
        raise ConflictError(values["title"], values["area"])

    repository = ActivityRepository(session)
    activity = Activity(
        id=None,
        user_id=owner.id,
        created_at=now_in_app_timezone(),
        **values,
    )
    created = store_activity(session, repository.create, activity)

    AuditRecorder(session).record(
        AUDIT_ACTION_CREATE,
        ENTITY_TYPE,
        created.id,
        owner.id,
        owner.email,
        changes=values,
    )

    if created.responsible:
        notify_safely(
            notifier,
            ActivityNotification(
                event_type=EVENT_ASSIGNED,
                activity=created,
                actor_name=owner.display_name,
            ),
        )
    return created
