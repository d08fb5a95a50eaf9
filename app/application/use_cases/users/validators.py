"""Common validation helpers for user use cases."""

from app.application.errors import ValidationError

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str | None) -> str:
    """Return a lower-cased address or raise :class:`ValidationError`."""

    normalized = (email or "").strip().lower()
    if normalized.count("@") != 1:
        raise ValidationError("E-mail inválido", details={"email": "E-mail inválido"})

    local_part, domain = normalized.split("@", 1)
    if not local_part or not domain:
        raise ValidationError("E-mail inválido", details={"email": "E-mail inválido"})
    return normalized
