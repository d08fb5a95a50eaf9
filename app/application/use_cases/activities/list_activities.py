"""Use case for listing activities."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError
from app.domain.entities import Activity
from app.infrastructure.repositories import ActivityRepository


def list_activities(
    session: Session,
    *,
    owner_id: int | None,
    status: str | None = None,
    area: str | None = None,
    include_deleted: bool = False,
) -> list[Activity]:
    """Return activities newest first; ``owner_id=None`` lists every owner."""

    try:
        return list(
            ActivityRepository(session).list(
                owner_id=owner_id,
                status=status,
                area=area,
                include_deleted=include_deleted,
            )
        )
    except SQLAlchemyError as exc:
        raise DataAccessError("Erro ao listar atividades") from exc
