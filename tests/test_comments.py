"""Tests for activity comments."""

from __future__ import annotations

import pytest

from app.application.errors import ForbiddenError, NotFoundError, ValidationError
from app.application.use_cases.activities import create_activity, delete_activity
from app.application.use_cases.audit_logs import list_audit_logs
from app.application.use_cases.comments import (
    create_comment,
    delete_comment,
    list_comments,
    update_comment,
)


@pytest.fixture()
def activity(session, owner):
    return create_activity(
        session, owner=owner, fields={"title": "Revisar contrato", "area": "Jurídico"}, notifier=None
    )


def test_comment_snapshots_author(session, owner, activity) -> None:
    comment = create_comment(
        session, activity_id=activity.id, actor=owner, content="  Primeira revisão feita  "
    )

    assert comment.content == "Primeira revisão feita"
    assert comment.user_id == owner.id
    assert comment.user_name == "Olivia Owner"
    assert comment.user_email == "owner@example.com"


def test_comments_are_listed_newest_first(session, owner, activity) -> None:
    for text in ("um", "dois", "três"):
        create_comment(session, activity_id=activity.id, actor=owner, content=text)

    comments = list_comments(session, activity_id=activity.id, actor=owner)

    assert [comment.content for comment in comments] == ["três", "dois", "um"]


@pytest.mark.parametrize("content", ["", "   ", "x" * 5001])
def test_comment_content_is_validated(session, owner, activity, content) -> None:
    with pytest.raises(ValidationError):
        create_comment(session, activity_id=activity.id, actor=owner, content=content)


def test_strangers_cannot_comment_or_read(session, other_user, activity) -> None:
    with pytest.raises(ForbiddenError):
        create_comment(session, activity_id=activity.id, actor=other_user, content="oi")
    with pytest.raises(ForbiddenError):
        list_comments(session, activity_id=activity.id, actor=other_user)


def test_comments_on_deleted_activity_are_refused(session, owner, activity) -> None:
    delete_activity(session, activity_id=activity.id, actor=owner, notifier=None)

    with pytest.raises(NotFoundError):
        create_comment(session, activity_id=activity.id, actor=owner, content="tarde demais")


def test_only_author_or_admin_may_edit(session, owner, admin, activity) -> None:
    by_admin = create_comment(session, activity_id=activity.id, actor=admin, content="Do admin")
    by_owner = create_comment(session, activity_id=activity.id, actor=owner, content="Do dono")

    with pytest.raises(ForbiddenError):
        update_comment(session, comment_id=by_admin.id, actor=owner, content="Editado")

    edited = update_comment(session, comment_id=by_owner.id, actor=admin, content="Moderado")
    assert edited.content == "Moderado"
    assert edited.user_name == "Olivia Owner"


def test_delete_removes_comment_and_is_audited(session, owner, activity) -> None:
    comment = create_comment(session, activity_id=activity.id, actor=owner, content="Apagar")

    delete_comment(session, comment_id=comment.id, actor=owner)

    assert list_comments(session, activity_id=activity.id, actor=owner) == []
    with pytest.raises(NotFoundError):
        delete_comment(session, comment_id=comment.id, actor=owner)
    actions = [
        entry.action
        for entry in list_audit_logs(session, entity_type="Comment", entity_id=str(comment.id))
    ]
    assert actions == ["CREATE", "DELETE"]
