"""Use case for registering users."""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.errors import DataAccessError, ValidationError
from app.domain.entities import User, UserRole
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone

from .validators import MIN_PASSWORD_LENGTH, normalize_email

EMAIL_TAKEN_MESSAGE = "Este e-mail já está cadastrado"


def register_user(
    session: Session,
    *,
    email: str,
    password: str,
    name: str | None = None,
    role: UserRole = UserRole.USER,
) -> User:
    """Create a new user ensuring unique email addresses.

    ``name`` falls back to the local part of the email address.
    """

    normalized_email = normalize_email(email)
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"A senha deve ter no mínimo {MIN_PASSWORD_LENGTH} caracteres",
            details={"password": f"Mínimo de {MIN_PASSWORD_LENGTH} caracteres"},
        )

    repository = UserRepository(session)
    if repository.get_by_email(normalized_email):
        raise ValidationError(EMAIL_TAKEN_MESSAGE, details={"email": EMAIL_TAKEN_MESSAGE})

    user = User(
        id=None,
        name=(name or "").strip() or normalized_email.split("@", 1)[0],
        email=normalized_email,
        password=get_password_hash(password),
        role=role,
        is_active=True,
        created_at=now_in_app_timezone(),
        updated_at=None,
    )
    try:
        return repository.create(user)
    except IntegrityError as exc:
        session.rollback()
        raise ValidationError(EMAIL_TAKEN_MESSAGE, details={"email": EMAIL_TAKEN_MESSAGE}) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise DataAccessError("Erro ao criar usuário") from exc
