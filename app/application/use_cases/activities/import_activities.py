"""Use case for bulk importing activities from normalized spreadsheet rows."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import (
    ConflictError,
    DataAccessError,
    ForbiddenError,
    ValidationError,
)
from app.application.use_cases.audit_logs import AuditRecorder
from app.domain.entities import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    Activity,
    User,
)
from app.infrastructure.repositories import ActivityRepository
from app.utils import now_in_app_timezone

from .create_activity import ENTITY_TYPE
from .duplicates import DuplicateChecker, find_duplicate, store_activity
from .validators import normalize_activity_fields

logger = logging.getLogger(__name__)

MAX_IMPORT_ROWS = 1000


@dataclass
class ImportResult:
    first_use: bool
    replaced: int = 0
    imported: list[Activity] = field(default_factory=list)
    skipped: list[dict[str, str]] = field(default_factory=list)


def _normalize_rows(rows: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    if not 1 <= len(rows) <= MAX_IMPORT_ROWS:
        raise ValidationError(
            f"A importação deve conter entre 1 e {MAX_IMPORT_ROWS} atividades"
        )
    normalized: list[dict[str, Any]] = []
    errors: dict[str, Any] = {}
    for index, row in enumerate(rows):
        try:
            normalized.append(normalize_activity_fields(row))
        except ValidationError as exc:
            errors[str(index)] = exc.details
    if errors:
        raise ValidationError("Dados de importação inválidos", details=errors)
    return normalized


def import_activities(
    session: Session,
    *,
    actor: User,
    rows: Sequence[Mapping[str, Any]],
    confirm: bool = False,
    checker: DuplicateChecker | None = None,
) -> ImportResult:
    """Persist ``rows`` as activities of ``actor``.

    The very first import (no activity stored at all, soft-deleted included)
    is open to everyone. Afterwards only administrators may import, they must
    pass ``confirm=True``, and their own active activities are soft-deleted
    before the new rows are stored. Duplicates are skipped and reported.
    Imports are audited but never notify.
    """

    values = _normalize_rows(rows)
    repository = ActivityRepository(session)
    recorder = AuditRecorder(session)

    try:
        first_use = repository.count(include_deleted=True) == 0
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao verificar atividades existentes") from exc

    result = ImportResult(first_use=first_use)
    if not first_use:
        if not actor.is_admin():
            raise ForbiddenError(
                "Apenas administradores podem reimportar atividades em um banco "
                "com dados existentes"
            )
        if not confirm:
            raise ValidationError(
                "Reimportação requer confirmação explícita. Use ?confirm=true"
            )
        try:
            for existing in repository.list(owner_id=actor.id):
                deleted = repository.soft_delete(existing.id)
                recorder.record(
                    AUDIT_ACTION_DELETE,
                    ENTITY_TYPE,
                    deleted.id,
                    actor.id,
                    actor.email,
                    changes={
                        "title": deleted.title,
                        "area": deleted.area,
                        "deletedAt": deleted.deleted_at.isoformat()
                        if deleted.deleted_at
                        else None,
                        "reason": "reimport",
                    },
                )
                result.replaced += 1
        except SQLAlchemyError as exc:
            session.rollback()
            raise DataAccessError("Erro ao substituir atividades existentes") from exc

    for row in values:
        if find_duplicate(session, actor.id, row["title"], row["area"], checker=checker):
            result.skipped.append(
                {"title": row["title"], "area": row["area"], "reason": "duplicada"}
            )
            continue
        activity = Activity(
            id=None, user_id=actor.id, created_at=now_in_app_timezone(), **row
        )
        try:
            created = store_activity(session, repository.create, activity)
        except ConflictError:
            result.skipped.append(
                {"title": row["title"], "area": row["area"], "reason": "duplicada"}
            )
            continue
        recorder.record(
            AUDIT_ACTION_CREATE,
            ENTITY_TYPE,
            created.id,
            actor.id,
            actor.email,
            changes={**row, "source": "import"},
        )
        result.imported.append(created)

    logger.info(
        "User %s imported %s activities (%s skipped, %s replaced)",
        actor.id,
        len(result.imported),
        len(result.skipped),
        result.replaced,
    )
    return result
