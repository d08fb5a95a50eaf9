"""Tests for the create, update and soft-delete activity use cases."""

from __future__ import annotations

import pytest

from app.application.errors import ForbiddenError, NotFoundError, ValidationError
from app.application.use_cases.activities import (
    create_activity,
    delete_activity,
    get_activity,
    list_activities,
    summarize_activities,
    update_activity,
)
from app.application.use_cases.audit_logs import AuditRecorder, list_audit_logs
from app.domain.entities import (
    ACTIVITY_STATUS_COMPLETED,
    AUDIT_ACTION_CREATE,
    ACTIVITY_STATUS_PENDING,
    EVENT_ASSIGNED,
    EVENT_DELETED,
    EVENT_STATUS_CHANGE,
    PRIORITY_MEDIUM,
)
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import ActivityRepository, AuditLogRepository


def _create(session, owner, notifier=None, **fields):
    payload = {"title": "Treinamento", "area": "RH", **fields}
    return create_activity(session, owner=owner, fields=payload, notifier=notifier)


def test_create_applies_defaults_and_trims(session, owner) -> None:
    created = _create(session, owner, title="  Treinamento  ", description="   ")

    assert created.id is not None
    assert created.user_id == owner.id
    assert created.title == "Treinamento"
    assert created.description is None
    assert created.priority == PRIORITY_MEDIUM
    assert created.status == ACTIVITY_STATUS_PENDING
    assert created.deleted_at is None


@pytest.mark.parametrize(
    ("fields", "field_name"),
    [
        ({"title": "", "area": "RH"}, "title"),
        ({"title": "T", "area": "   "}, "area"),
        ({"title": "T", "area": "RH", "priority": 3}, "priority"),
        ({"title": "T", "area": "RH", "priority": True}, "priority"),
        ({"title": "T", "area": "RH", "status": "done"}, "status"),
        ({"title": "x" * 256, "area": "RH"}, "title"),
        ({"title": "T", "area": "RH", "cost": "9" * 51}, "cost"),
        ({"title": "T", "area": "RH", "owner": "me"}, "owner"),
    ],
)
def test_create_rejects_invalid_fields(session, owner, fields, field_name) -> None:
    with pytest.raises(ValidationError) as exc_info:
        create_activity(session, owner=owner, fields=fields, notifier=None)

    assert field_name in exc_info.value.details
    assert ActivityRepository(session).count() == 0


def test_create_notifies_only_when_responsible_is_set(session, owner, notifier) -> None:
    _create(session, owner, notifier, title="Sem responsável")
    assigned = _create(session, owner, notifier, title="Com responsável", responsible="Ana")

    assert notifier.events() == [EVENT_ASSIGNED]
    assert notifier.notifications[0].activity.id == assigned.id
    assert notifier.notifications[0].actor_name == "Olivia Owner"
    assert notifier.notifications[0].recipient_id == owner.id


def test_update_status_change_notifies_with_labels(session, owner, notifier) -> None:
    created = _create(session, owner)

    updated = update_activity(
        session,
        activity_id=created.id,
        actor=owner,
        fields={"status": ACTIVITY_STATUS_COMPLETED},
        notifier=notifier,
    )

    assert updated.status == ACTIVITY_STATUS_COMPLETED
    assert notifier.events() == [EVENT_STATUS_CHANGE]
    notification = notifier.notifications[0]
    assert notification.old_status == "Pendente"
    assert notification.new_status == "Concluído"


def test_update_without_status_change_does_not_notify(session, owner, notifier) -> None:
    created = _create(session, owner)

    update_activity(
        session,
        activity_id=created.id,
        actor=owner,
        fields={"description": "Nova descrição", "responsible": None},
        notifier=notifier,
    )

    assert notifier.notifications == []


def test_update_with_empty_patch_is_rejected(session, owner) -> None:
    created = _create(session, owner)

    with pytest.raises(ValidationError):
        update_activity(
            session, activity_id=created.id, actor=owner, fields={}, notifier=None
        )


def test_update_missing_activity_raises_not_found(session, owner) -> None:
    with pytest.raises(NotFoundError):
        update_activity(
            session, activity_id=999, actor=owner, fields={"title": "X"}, notifier=None
        )


def test_soft_delete_hides_activity_but_keeps_row(session, owner, notifier) -> None:
    created = _create(session, owner)

    delete_activity(session, activity_id=created.id, actor=owner, notifier=notifier)

    assert notifier.events() == [EVENT_DELETED]
    with pytest.raises(NotFoundError):
        get_activity(session, activity_id=created.id, actor=owner)
    assert list_activities(session, owner_id=owner.id) == []

    stored = get_activity(session, activity_id=created.id, actor=owner, include_deleted=True)
    assert stored.deleted_at is not None
    assert ActivityRepository(session).count(include_deleted=True) == 1


def test_deleted_activity_cannot_be_updated_or_deleted_again(session, owner) -> None:
    created = _create(session, owner)
    delete_activity(session, activity_id=created.id, actor=owner, notifier=None)

    with pytest.raises(NotFoundError):
        update_activity(
            session, activity_id=created.id, actor=owner, fields={"title": "Y"}, notifier=None
        )
    with pytest.raises(NotFoundError):
        delete_activity(session, activity_id=created.id, actor=owner, notifier=None)


def test_update_of_activity_deleted_concurrently_raises_not_found(
    session, owner, monkeypatch
) -> None:
    created = _create(session, owner)
    original_get = ActivityRepository.get

    def get_then_delete_elsewhere(self, activity_id, **kwargs):
        found = original_get(self, activity_id, **kwargs)
        with SessionLocal() as other_session:
            ActivityRepository(other_session).soft_delete(activity_id)
        return found

    monkeypatch.setattr(ActivityRepository, "get", get_then_delete_elsewhere)

    with pytest.raises(NotFoundError):
        update_activity(
            session,
            activity_id=created.id,
            actor=owner,
            fields={"status": "completed"},
            notifier=None,
        )

    entries = list_audit_logs(session, entity_type="Activity", entity_id=created.id)
    assert [entry.action for entry in entries] == [AUDIT_ACTION_CREATE]


@pytest.mark.parametrize(
    ("actor_fixture", "allowed"),
    [("owner", True), ("admin", True), ("other_user", False)],
)
@pytest.mark.parametrize("operation", ["get", "update", "delete"])
def test_only_owner_or_admin_may_touch_an_activity(
    request, session, owner, actor_fixture, allowed, operation
) -> None:
    created = _create(session, owner)
    actor = request.getfixturevalue(actor_fixture)

    def run():
        if operation == "get":
            return get_activity(session, activity_id=created.id, actor=actor)
        if operation == "update":
            return update_activity(
                session,
                activity_id=created.id,
                actor=actor,
                fields={"priority": 0},
                notifier=None,
            )
        return delete_activity(session, activity_id=created.id, actor=actor, notifier=None)

    if allowed:
        run()
    else:
        with pytest.raises(ForbiddenError):
            run()
        assert get_activity(session, activity_id=created.id, actor=owner).priority == 1


def test_mutations_are_audited(session, owner, admin) -> None:
    created = _create(session, owner)
    update_activity(
        session, activity_id=created.id, actor=admin, fields={"priority": 0}, notifier=None
    )
    delete_activity(session, activity_id=created.id, actor=owner, notifier=None)

    entries = list_audit_logs(session, entity_type="Activity", entity_id=str(created.id))

    assert [entry.action for entry in entries] == ["CREATE", "UPDATE", "DELETE"]
    assert entries[0].changes["title"] == "Treinamento"
    assert entries[1].user_email == "admin@example.com"
    assert entries[1].changes == {"priority": 0}
    assert entries[2].changes["deletedAt"] is not None


def test_audit_failure_does_not_fail_the_mutation(session, owner, monkeypatch, caplog) -> None:
    def broken_create(self, entry):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(AuditLogRepository, "create", broken_create)

    with caplog.at_level("ERROR"):
        created = _create(session, owner)

    assert ActivityRepository(session).get(created.id) is not None
    assert "Failed to record audit entry" in caplog.text


def test_audit_recorder_rejects_unknown_action(session, owner) -> None:
    with pytest.raises(ValueError):
        AuditRecorder(session).record("PATCH", "Activity", 1, owner.id, owner.email)


def test_notifier_failure_does_not_fail_the_mutation(session, owner, caplog) -> None:
    class ExplodingNotifier:
        def notify(self, notification):
            raise RuntimeError("queue is gone")

    with caplog.at_level("ERROR"):
        created = _create(session, owner, ExplodingNotifier(), responsible="Ana")

    assert created.id is not None
    assert "Could not hand off" in caplog.text


def test_list_filters_and_admin_view(session, owner, other_user) -> None:
    _create(session, owner, title="A", status="completed")
    _create(session, owner, title="B", area="TI")
    _create(session, other_user, title="C")

    assert [a.title for a in list_activities(session, owner_id=owner.id, status="completed")] == ["A"]
    assert [a.title for a in list_activities(session, owner_id=owner.id, area="TI")] == ["B"]
    assert {a.title for a in list_activities(session, owner_id=None)} == {"A", "B", "C"}


def test_summary_counts_only_active_activities(session, owner) -> None:
    _create(session, owner, title="A", priority=0)
    _create(session, owner, title="B", status="in_progress", area="TI")
    removed = _create(session, owner, title="C")
    delete_activity(session, activity_id=removed.id, actor=owner, notifier=None)

    summary = summarize_activities(session, owner_id=owner.id)

    assert summary.total == 2
    assert summary.by_status == {"pending": 1, "in_progress": 1, "completed": 0}
    assert summary.by_priority == {0: 1, 1: 1, 2: 0}
    assert summary.by_area == {"RH": 1, "TI": 1}
