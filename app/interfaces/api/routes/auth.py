"""Endpoints de cadastro e autenticação."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.errors import ActivityTrackerError
from app.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
    register_user,
)
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.security import create_access_token
from app.interfaces.api.dependencies import get_current_active_user, password_signature
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import RegisterRequest, Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> UserRead:
    """Cria uma conta com o papel de usuário comum."""

    try:
        user = register_user(
            db, email=payload.email, password=payload.password, name=payload.name
        )
    except ActivityTrackerError as exc:
        raise to_http_exception(exc) from exc
    logger.info("Registered user %s", user.id)
    return UserRead.model_validate(user)


# Nota: mantém a assinatura esperada por OAuth2PasswordRequestForm.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Autentica o usuário pelo e-mail e devolve um token JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais incorretas",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuário inativo",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={
            "sub": user.email,
            "role": user.role.value,
            "pwd_sig": password_signature(user),
        },
        expires_delta=timedelta(minutes=get_settings().access_token_expire_minutes),
    )
    record_login(db, user.id)
    return {"access_token": access_token, "token_type": "bearer", "role": user.role.value}


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)) -> UserRead:
    """Retorna os dados do usuário autenticado."""

    return UserRead.model_validate(current_user)


__all__ = ["router"]
