"""Routes for inspecting audit log entries."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.errors import ActivityTrackerError
from app.application.use_cases.audit_logs import list_audit_logs as list_audit_logs_uc
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import AuditLogRead

router = APIRouter(prefix="/audit-logs", tags=["audit_logs"])


@router.get("/", response_model=list[AuditLogRead])
def list_audit_logs(
    entity_type: str | None = None,
    entity_id: str | None = None,
    limit: int | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[AuditLogRead]:
    """Return audit entries, optionally filtered by entity."""

    try:
        entries = list_audit_logs_uc(
            db, entity_type=entity_type, entity_id=entity_id, limit=limit
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return [AuditLogRead.model_validate(entry) for entry in entries]


__all__ = ["router"]
