"""Tests for bulk import rules."""

from __future__ import annotations

import pytest

from app.application.errors import ForbiddenError, ValidationError
from app.application.use_cases.activities import (
    MAX_IMPORT_ROWS,
    create_activity,
    import_activities,
    list_activities,
)
from app.application.use_cases.audit_logs import list_audit_logs
from app.infrastructure.repositories import ActivityRepository


ROWS = [
    {"title": "Mapear processos", "area": "Qualidade", "priority": 0},
    {"title": "Treinar equipe", "area": "RH", "status": "in_progress"},
    {"title": "MAPEAR PROCESSOS", "area": "qualidade"},
]


def test_first_import_is_open_to_any_user(session, owner) -> None:
    result = import_activities(session, actor=owner, rows=ROWS)

    assert result.first_use is True
    assert result.replaced == 0
    assert [activity.title for activity in result.imported] == [
        "Mapear processos",
        "Treinar equipe",
    ]
    assert result.skipped == [
        {"title": "MAPEAR PROCESSOS", "area": "qualidade", "reason": "duplicada"}
    ]
    entries = list_audit_logs(session, entity_type="Activity")
    assert [entry.action for entry in entries] == ["CREATE", "CREATE"]
    assert all(entry.changes["source"] == "import" for entry in entries)


def test_reimport_by_regular_user_is_forbidden(session, owner) -> None:
    import_activities(session, actor=owner, rows=ROWS[:1])

    with pytest.raises(ForbiddenError):
        import_activities(session, actor=owner, rows=ROWS[1:2], confirm=True)


def test_first_use_counts_soft_deleted_rows(session, owner, other_user) -> None:
    created = create_activity(
        session, owner=owner, fields={"title": "Antiga", "area": "TI"}, notifier=None
    )
    ActivityRepository(session).soft_delete(created.id)

    with pytest.raises(ForbiddenError):
        import_activities(session, actor=other_user, rows=ROWS[:1])


def test_admin_reimport_requires_confirmation(session, owner, admin) -> None:
    import_activities(session, actor=owner, rows=ROWS[:1])

    with pytest.raises(ValidationError) as exc_info:
        import_activities(session, actor=admin, rows=ROWS[1:2])

    assert "confirm=true" in exc_info.value.message


def test_admin_reimport_replaces_only_own_active_activities(session, owner, admin) -> None:
    import_activities(session, actor=owner, rows=ROWS[:1])
    create_activity(
        session, owner=admin, fields={"title": "Velha", "area": "TI"}, notifier=None
    )

    result = import_activities(session, actor=admin, rows=ROWS[:2], confirm=True)

    assert result.first_use is False
    assert result.replaced == 1
    assert len(result.imported) == 2
    assert {a.title for a in list_activities(session, owner_id=admin.id)} == {
        "Mapear processos",
        "Treinar equipe",
    }
    assert [a.title for a in list_activities(session, owner_id=owner.id)] == ["Mapear processos"]
    deletions = [
        entry
        for entry in list_audit_logs(session, entity_type="Activity")
        if entry.action == "DELETE"
    ]
    assert len(deletions) == 1
    assert deletions[0].changes["reason"] == "reimport"


def test_invalid_rows_abort_the_whole_import(session, owner) -> None:
    rows = [
        {"title": "Válida", "area": "TI"},
        {"title": "Sem área"},
        {"title": "Prioridade ruim", "area": "TI", "priority": 7},
    ]

    with pytest.raises(ValidationError) as exc_info:
        import_activities(session, actor=owner, rows=rows)

    assert set(exc_info.value.details) == {"1", "2"}
    assert "area" in exc_info.value.details["1"]
    assert ActivityRepository(session).count() == 0


@pytest.mark.parametrize("size", [0, MAX_IMPORT_ROWS + 1])
def test_import_size_limits(session, owner, size) -> None:
    rows = [{"title": f"T{index}", "area": "TI"} for index in range(size)]

    with pytest.raises(ValidationError):
        import_activities(session, actor=owner, rows=rows)
