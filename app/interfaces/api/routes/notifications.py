"""Rotas de preferências de notificação e envio de e-mails."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.errors import ActivityTrackerError
from app.application.use_cases.notifications import (
    get_notification_preferences,
    list_email_logs as list_email_logs_uc,
    send_daily_digest,
    send_test_email as send_test_email_uc,
    update_notification_preferences,
)
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.email import EmailTransport
from app.interfaces.api.dependencies import get_current_active_user, get_email_transport
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    DispatchResultRead,
    EmailLogRead,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/preferences", response_model=NotificationPreferencesRead)
def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    """Retorna as preferências do usuário, criando as padrão se necessário."""

    try:
        preferences = get_notification_preferences(db, user_id=current_user.id)
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return NotificationPreferencesRead.model_validate(preferences)


@router.put("/preferences", response_model=NotificationPreferencesRead)
def update_preferences(
    payload: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferencesRead:
    """Atualiza parcialmente as preferências. String vazia limpa o horário de silêncio."""

    try:
        preferences = update_notification_preferences(
            db,
            user_id=current_user.id,
            changes=payload.model_dump(exclude_unset=True),
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return NotificationPreferencesRead.model_validate(preferences)


@router.post("/test", response_model=DispatchResultRead)
def send_test_email(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    transport: EmailTransport = Depends(get_email_transport),
) -> DispatchResultRead:
    """Envia um e-mail de teste ignorando as preferências do usuário."""

    if not transport.configured:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Serviço de e-mail não configurado. Defina SENDGRID_API_KEY e SENDGRID_SENDER.",
        )

    result = send_test_email_uc(
        db, user=current_user, transport=transport, base_url=get_settings().app_base_url
    )
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.error or "Falha ao enviar email de teste",
        )
    return DispatchResultRead(
        success=True,
        message=f"Email de teste enviado com sucesso para {current_user.email}",
    )


@router.post("/digest", response_model=DispatchResultRead)
def send_digest(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    transport: EmailTransport = Depends(get_email_transport),
) -> DispatchResultRead:
    """Monta e envia o resumo diário do usuário, respeitando as preferências."""

    try:
        result = send_daily_digest(
            db, user=current_user, transport=transport, base_url=get_settings().app_base_url
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc

    if result.success:
        message = "Resumo diário enviado"
    elif result.skipped:
        message = "Resumo diário não enviado"
    else:
        message = "Falha ao enviar o resumo diário"
    return DispatchResultRead(
        success=result.success,
        message=message,
        error=result.error,
        skipped=result.skipped,
    )


@router.get("/email-logs", response_model=list[EmailLogRead])
def list_email_logs(
    limit: int = 50,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[EmailLogRead]:
    try:
        entries = list_email_logs_uc(db, user_id=current_user.id, limit=limit)
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    return [EmailLogRead.model_validate(entry) for entry in entries]


__all__ = ["router"]
