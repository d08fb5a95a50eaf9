"""FastAPI dependency utilities."""

from functools import lru_cache
from hashlib import sha256

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import ActivityNotifier
from app.config import get_settings
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.email import EmailTransport, build_email_transport
from app.infrastructure.notifications import get_notification_queue
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def password_signature(user: User) -> str:
    """Fingerprint embedded in tokens so a password change revokes them."""

    return sha256(f"{user.password}:{int(user.is_active)}".encode()).hexdigest()


def _credentials_error(detail: str = "Credenciais inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_error("Usuário não encontrado")
    if signature_claim != password_signature(user):
        raise _credentials_error()
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuário inativo",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito a administradores",
        )
    return current_user


@lru_cache
def get_email_transport() -> EmailTransport:
    """Return the transport matching the configured email credentials."""

    return build_email_transport(get_settings())


def get_activity_notifier(
    transport: EmailTransport = Depends(get_email_transport),
) -> ActivityNotifier:
    """Return a notifier that delivers on the shared background queue."""

    return ActivityNotifier(
        transport=transport,
        queue=get_notification_queue(),
        base_url=get_settings().app_base_url,
    )
