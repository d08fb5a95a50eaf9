"""Rotas para gerenciar atividades estratégicas (5W2H)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from app.application.errors import ActivityTrackerError
from app.application.use_cases.activities import (
    create_activity as create_activity_uc,
    delete_activity as delete_activity_uc,
    export_activities_workbook,
    get_activity as get_activity_uc,
    import_activities as import_activities_uc,
    list_activities as list_activities_uc,
    parse_activity_spreadsheet,
    summarize_activities as summarize_activities_uc,
    update_activity as update_activity_uc,
)
from app.application.use_cases.notifications import ActivityNotifier
from app.domain.entities import Activity, User
from app.infrastructure.database import get_db
from app.infrastructure.spreadsheets import EXCEL_CONTENT_TYPE
from app.interfaces.api.dependencies import get_activity_notifier, get_current_active_user
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    ActivityCreate,
    ActivityImportRequest,
    ActivityImportResponse,
    ActivityRead,
    ActivitySummaryRead,
    ActivityUpdate,
    ImportSkippedRow,
    SpreadsheetRow,
    SpreadsheetUploadResponse,
    activity_fields,
)

router = APIRouter(prefix="/activities", tags=["activities"])
logger = logging.getLogger(__name__)


def _to_read_model(activity: Activity) -> ActivityRead:
    return ActivityRead.model_validate(activity)


def _resolve_owner(current_user: User, owner_id: int | None) -> int | None:
    if owner_id is None or owner_id == current_user.id:
        return current_user.id
    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Apenas administradores podem consultar atividades de outros usuários",
        )
    return owner_id


@router.get("/", response_model=list[ActivityRead])
def list_activities(
    status_filter: str | None = Query(default=None, alias="status"),
    area: str | None = None,
    owner_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ActivityRead]:
    """Lista as atividades ativas, das mais recentes para as mais antigas."""

    try:
        activities = list_activities_uc(
            db,
            owner_id=_resolve_owner(current_user, owner_id),
            status=status_filter,
            area=area,
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return [_to_read_model(activity) for activity in activities]


@router.get("/summary", response_model=ActivitySummaryRead)
def read_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ActivitySummaryRead:
    """Contadores do dashboard por status, prioridade e área."""

    try:
        summary = summarize_activities_uc(db, owner_id=current_user.id)
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return ActivitySummaryRead.model_validate(summary)


@router.get("/export")
def export_activities(
    status_filter: str | None = Query(default=None, alias="status"),
    area: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Exporta as atividades do usuário em uma planilha ``.xlsx``."""

    try:
        activities = list_activities_uc(
            db, owner_id=current_user.id, status=status_filter, area=area
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc

    filename, content = export_activities_workbook(activities)
    return Response(
        content=content,
        media_type=EXCEL_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/upload", response_model=SpreadsheetUploadResponse)
def upload_spreadsheet(
    file: UploadFile = File(...),
    _: User = Depends(get_current_active_user),
) -> SpreadsheetUploadResponse:
    """Lê uma planilha e devolve as atividades normalizadas, sem salvá-las."""

    try:
        file_bytes = file.file.read()
    finally:
        file.file.seek(0)

    try:
        rows = parse_activity_spreadsheet(file_bytes, file.filename or "")
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc

    return SpreadsheetUploadResponse(
        activities=[SpreadsheetRow.model_validate(row) for row in rows],
        count=len(rows),
        message=f"{len(rows)} atividades lidas com sucesso",
    )


@router.post("/import", response_model=ActivityImportResponse, status_code=status.HTTP_201_CREATED)
def import_activities(
    payload: ActivityImportRequest,
    confirm: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ActivityImportResponse:
    """Importa atividades em lote para o usuário autenticado."""

    try:
        result = import_activities_uc(
            db,
            actor=current_user,
            rows=[row.model_dump() for row in payload.activities],
            confirm=confirm,
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc

    origin = "primeira configuração" if result.first_use else "reimportação admin"
    return ActivityImportResponse(
        first_use=result.first_use,
        imported=len(result.imported),
        replaced=result.replaced,
        skipped=[ImportSkippedRow(**entry) for entry in result.skipped],
        message=f"{len(result.imported)} atividades importadas com sucesso ({origin})",
    )


@router.post("/", response_model=ActivityRead, status_code=status.HTTP_201_CREATED)
def create_activity(
    payload: ActivityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    notifier: ActivityNotifier = Depends(get_activity_notifier),
) -> ActivityRead:
    """Cria uma atividade, rejeitando duplicatas de título e área."""

    try:
        activity = create_activity_uc(
            db,
            owner=current_user,
            fields=activity_fields(payload),
            notifier=notifier,
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(activity)


@router.get("/{activity_id}", response_model=ActivityRead)
def read_activity(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ActivityRead:
    try:
        activity = get_activity_uc(db, activity_id=activity_id, actor=current_user)
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(activity)


@router.put("/{activity_id}", response_model=ActivityRead)
def update_activity(
    activity_id: int,
    payload: ActivityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    notifier: ActivityNotifier = Depends(get_activity_notifier),
) -> ActivityRead:
    """Atualiza os campos enviados de uma atividade."""

    try:
        activity = update_activity_uc(
            db,
            activity_id=activity_id,
            actor=current_user,
            fields=activity_fields(payload),
            notifier=notifier,
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(activity)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_activity(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    notifier: ActivityNotifier = Depends(get_activity_notifier),
) -> Response:
    """Exclui a atividade (exclusão lógica)."""

    try:
        delete_activity_uc(
            db, activity_id=activity_id, actor=current_user, notifier=notifier
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
