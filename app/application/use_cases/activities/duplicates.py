"""Duplicate detection for activities of a single owner."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import ConflictError, DataAccessError
from app.domain.entities import Activity
from app.infrastructure.repositories import ActivityRepository

logger = logging.getLogger(__name__)

_NATIVE_LOWER_DIALECTS = frozenset({"postgresql"})


class DuplicateChecker(Protocol):
    """Look up an active activity whose title and area match ignoring case."""

    def find_duplicate(
        self,
        owner_id: int,
        title: str,
        area: str,
        exclude_id: int | None = None,
    ) -> Activity | None:
        ...


class ScanningDuplicateChecker:
    """Compare the owner's active activities in memory.

    Works the same on every backend, including SQLite whose ``lower()`` only
    folds ASCII letters.
    """

    def __init__(self, session: Session) -> None:
        self._repository = ActivityRepository(session)

    def find_duplicate(
        self,
        owner_id: int,
        title: str,
        area: str,
        exclude_id: int | None = None,
    ) -> Activity | None:
        wanted_title = title.strip().lower()
        wanted_area = area.strip().lower()
        try:
            candidates = self._repository.list_active_keys(owner_id, exclude_id=exclude_id)
            for activity_id, stored_title, stored_area in candidates:
                if (
                    stored_title.strip().lower() == wanted_title
                    and stored_area.strip().lower() == wanted_area
                ):
                    return self._repository.get(activity_id)
        except SQLAlchemyError as exc:
            raise DataAccessError("Erro ao verificar atividades duplicadas") from exc
        return None


class CollationDuplicateChecker:
    """Let the database compare ``lower(title)`` and ``lower(area)``."""

    def __init__(self, session: Session) -> None:
        self._repository = ActivityRepository(session)

    def find_duplicate(
        self,
        owner_id: int,
        title: str,
        area: str,
        exclude_id: int | None = None,
    ) -> Activity | None:
        try:
            return self._repository.find_active_by_title_and_area(
                owner_id, title.strip(), area.strip(), exclude_id=exclude_id
            )
        except SQLAlchemyError as exc:
            raise DataAccessError("Erro ao verificar atividades duplicadas") from exc


def select_duplicate_checker(session: Session) -> DuplicateChecker:
    """Return the checker best suited to the dialect ``session`` is bound to."""

    bind = session.get_bind()
    dialect_name = getattr(getattr(bind, "dialect", None), "name", "")
    if dialect_name in _NATIVE_LOWER_DIALECTS:
        return CollationDuplicateChecker(session)
    return ScanningDuplicateChecker(session)


def find_duplicate(
    session: Session,
    owner_id: int,
    title: str,
    area: str,
    exclude_id: int | None = None,
    *,
    checker: DuplicateChecker | None = None,
) -> Activity | None:
    """Return the owner's active activity matching ``title``/``area``, if any."""

    active_checker = checker or select_duplicate_checker(session)
    duplicate = active_checker.find_duplicate(owner_id, title, area, exclude_id)
    if duplicate is not None:
        logger.info(
            "Duplicate activity detected for user %s: #%s (%r, %r)",
            owner_id,
            duplicate.id,
            title,
            area,
        )
    return duplicate


def store_activity(
    session: Session,
    save: Callable[[Activity], Activity],
    activity: Activity,
) -> Activity:
    """Run ``save`` and turn a unique index violation into :class:`ConflictError`.

    The partial unique index on ``(user_id, lower(title), lower(area))`` is the
    authoritative guard; :func:`find_duplicate` only runs first to fail early.
    """

    try:
        return save(activity)
    except IntegrityError as exc:
        session.rollback()
        logger.warning(
            "Unique index rejected activity (%r, %r) for user %s",
            activity.title,
            activity.area,
            activity.user_id,
        )
        raise ConflictError(activity.title, activity.area) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao salvar a atividade") from exc


__all__ = [
    "CollationDuplicateChecker",
    "DuplicateChecker",
    "ScanningDuplicateChecker",
    "find_duplicate",
    "select_duplicate_checker",
    "store_activity",
]
