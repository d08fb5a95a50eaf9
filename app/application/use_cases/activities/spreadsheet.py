"""Use cases converting activities to and from spreadsheets."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import PurePath
from typing import Any, Final

from app.application.errors import ValidationError
from app.domain.entities import (
    ACTIVITY_STATUS_COMPLETED,
    ACTIVITY_STATUS_IN_PROGRESS,
    ACTIVITY_STATUS_PENDING,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Activity,
    priority_label,
    status_label,
)
from app.infrastructure.spreadsheets import build_workbook, read_spreadsheet_rows
from app.utils import now_in_app_timezone

EXPORT_HEADERS: Final[tuple[str, ...]] = (
    "O Quê?",
    "Por Quê?",
    "Área",
    "Prioridade",
    "Status",
    "Quem?",
    "Quando?",
    "Onde?",
    "Como?",
    "Quanto?",
)

HEADER_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    "title": ("Título", "Title", "O Quê?", "O Que?", "Atividade", "Task", "titulo"),
    "description": (
        "Descrição",
        "Description",
        "Por Quê?",
        "Por Que?",
        "Justificativa",
        "descricao",
    ),
    "area": ("Área", "Area", "Setor", "area"),
    "responsible": ("Responsável", "Responsible", "Quem?", "Quem", "responsavel"),
    "deadline": ("Prazo", "Deadline", "Quando?", "Quando", "Data", "prazo"),
    "location": ("Local", "Location", "Onde?", "Onde", "local"),
    "how": ("Como?", "Como", "How", "Método", "Processo"),
    "cost": ("Custo", "Cost", "Quanto?", "Quanto", "Valor", "Investimento"),
}
PRIORITY_ALIASES: Final[tuple[str, ...]] = ("Prioridade", "Priority", "prioridade", "priority")
STATUS_ALIASES: Final[tuple[str, ...]] = ("Status", "Estado", "status")


def _field(row: Mapping[str, Any], names: Sequence[str]) -> str:
    for name in names:
        value = row.get(name)
        if value is not None:
            return str(value).strip()
    return ""


def parse_priority(raw: str) -> int:
    """Map a priority cell (label or number) to its ordinal, defaulting to medium."""

    value = raw.strip().lower()
    if "alta" in value or "high" in value or value == "0":
        return PRIORITY_HIGH
    if "média" in value or "media" in value or "medium" in value or value == "1":
        return PRIORITY_MEDIUM
    if "baixa" in value or "low" in value or value == "2":
        return PRIORITY_LOW
    return PRIORITY_MEDIUM


def parse_status(raw: str) -> str:
    value = raw.strip().lower()
    if "concluído" in value or "concluido" in value or "completed" in value:
        return ACTIVITY_STATUS_COMPLETED
    if "andamento" in value or "progress" in value:
        return ACTIVITY_STATUS_IN_PROGRESS
    return ACTIVITY_STATUS_PENDING


def normalize_spreadsheet_row(row: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {
        name: _field(row, aliases) or None for name, aliases in HEADER_ALIASES.items()
    }
    normalized["priority"] = parse_priority(_field(row, PRIORITY_ALIASES))
    normalized["status"] = parse_status(_field(row, STATUS_ALIASES))
    return normalized


def parse_activity_spreadsheet(file_bytes: bytes, filename: str) -> list[dict[str, Any]]:
    """Read an uploaded sheet into normalized activity rows without storing them.

    Rows lacking a title are dropped.
    """

    if not file_bytes:
        raise ValidationError("Nenhum arquivo enviado")
    try:
        rows = read_spreadsheet_rows(file_bytes, PurePath(filename or "").suffix)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if not rows:
        raise ValidationError("Planilha vazia ou formato inválido")

    activities = [normalize_spreadsheet_row(row) for row in rows]
    activities = [activity for activity in activities if activity["title"]]
    if not activities:
        raise ValidationError("Nenhuma atividade válida encontrada na planilha")
    return activities


def export_activities_workbook(activities: Sequence[Activity]) -> tuple[str, bytes]:
    """Return ``(filename, xlsx bytes)`` for ``activities``."""

    rows = [
        (
            activity.title,
            activity.description,
            activity.area,
            priority_label(activity.priority),
            status_label(activity.status),
            activity.responsible,
            activity.deadline,
            activity.location,
            activity.how,
            activity.cost,
        )
        for activity in activities
    ]
    filename = f"atividades_{now_in_app_timezone().date().isoformat()}.xlsx"
    return filename, build_workbook(EXPORT_HEADERS, rows)


__all__ = [
    "EXPORT_HEADERS",
    "HEADER_ALIASES",
    "export_activities_workbook",
    "normalize_spreadsheet_row",
    "parse_activity_spreadsheet",
    "parse_priority",
    "parse_status",
]
