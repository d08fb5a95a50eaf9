"""Field normalization shared by the activity use cases."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from app.application.errors import ForbiddenError, ValidationError
from app.domain.entities import (
    ACTIVITY_STATUSES,
    ACTIVITY_STATUS_PENDING,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Activity,
    User,
)

REQUIRED_TEXT_LIMITS: Final[dict[str, int]] = {"title": 255, "area": 100}
OPTIONAL_TEXT_LIMITS: Final[dict[str, int]] = {
    "description": 5000,
    "responsible": 100,
    "deadline": 50,
    "location": 200,
    "how": 5000,
    "cost": 50,
}
EDITABLE_FIELDS: Final[tuple[str, ...]] = (
    *REQUIRED_TEXT_LIMITS,
    "priority",
    "status",
    *OPTIONAL_TEXT_LIMITS,
)

_FIELD_LABELS: Final[dict[str, str]] = {
    "title": "Título",
    "area": "Área",
    "description": "Descrição",
    "responsible": "Responsável",
    "deadline": "Prazo",
    "location": "Local",
    "how": "Como",
    "cost": "Custo",
}


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_activity_fields(
    fields: Mapping[str, Any], *, partial: bool = False
) -> dict[str, Any]:
    """Return trimmed, range-checked activity fields.

    With ``partial=False`` the result holds every editable field, with
    ``priority`` defaulting to medium and ``status`` to pending. With
    ``partial=True`` only the submitted keys are returned. Raises
    :class:`ValidationError` whose ``details`` map field names to messages.
    """

    unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
    if unknown:
        raise ValidationError(
            "Campos desconhecidos: " + ", ".join(unknown),
            details={name: "Campo não permitido" for name in unknown},
        )

    errors: dict[str, str] = {}
    normalized: dict[str, Any] = {}

    for name, limit in REQUIRED_TEXT_LIMITS.items():
        if partial and name not in fields:
            continue
        value = _clean_text(fields.get(name))
        if value is None:
            errors[name] = f"{_FIELD_LABELS[name]} é obrigatório"
        elif len(value) > limit:
            errors[name] = f"{_FIELD_LABELS[name]} deve ter no máximo {limit} caracteres"
        else:
            normalized[name] = value

    for name, limit in OPTIONAL_TEXT_LIMITS.items():
        if partial and name not in fields:
            continue
        value = _clean_text(fields.get(name))
        if value is not None and len(value) > limit:
            errors[name] = f"{_FIELD_LABELS[name]} deve ter no máximo {limit} caracteres"
        else:
            normalized[name] = value

    if not partial or "priority" in fields:
        priority = fields.get("priority")
        if priority is None and not partial:
            normalized["priority"] = PRIORITY_MEDIUM
        elif isinstance(priority, bool) or not isinstance(priority, int):
            errors["priority"] = "Prioridade deve ser 0 (Alta), 1 (Média) ou 2 (Baixa)"
        elif not PRIORITY_HIGH <= priority <= PRIORITY_LOW:
            errors["priority"] = "Prioridade deve ser 0 (Alta), 1 (Média) ou 2 (Baixa)"
        else:
            normalized["priority"] = priority

    if not partial or "status" in fields:
        status = fields.get("status")
        if status is None and not partial:
            normalized["status"] = ACTIVITY_STATUS_PENDING
        elif status not in ACTIVITY_STATUSES:
            errors["status"] = "Status deve ser pending, in_progress ou completed"
        else:
            normalized["status"] = status

    if errors:
        raise ValidationError("Dados da atividade inválidos", details=errors)
    return normalized


def can_modify_activity(activity: Activity, actor: User) -> bool:
    """Owners and administrators may change an activity."""

    return activity.user_id == actor.id or actor.is_admin()


def ensure_can_modify_activity(activity: Activity, actor: User) -> None:
    if not can_modify_activity(activity, actor):
        raise ForbiddenError("Você não tem permissão para alterar esta atividade")


__all__ = [
    "EDITABLE_FIELDS",
    "can_modify_activity",
    "ensure_can_modify_activity",
    "normalize_activity_fields",
]
