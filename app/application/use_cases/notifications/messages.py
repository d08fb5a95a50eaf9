"""Subjects and HTML bodies for notification emails."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from html import escape

from app.domain.entities import Activity, priority_label


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    html_content: str


@dataclass(frozen=True)
class DigestCounts:
    pending: int = 0
    in_progress: int = 0
    completed: int = 0

    @property
    def active(self) -> int:
        return self.pending + self.in_progress


def _activities_link(base_url: str) -> str:
    url = f"{base_url.rstrip('/')}/dashboard/activities"
    return f'<p><a href="{escape(url, quote=True)}">Ver atividades</a></p>'


def _detail(label: str, value: str | None) -> str:
    if not value:
        return ""
    return f"<strong>{label}:</strong> {escape(value)}<br>"


def build_assigned_message(activity: Activity, *, assigned_by: str, base_url: str) -> EmailMessage:
    details = "".join(
        [
            _detail("Área", activity.area),
            _detail("Prioridade", priority_label(activity.priority)),
            _detail("Responsável", activity.responsible),
            _detail("Prazo", activity.deadline),
            _detail("Local", activity.location),
        ]
    )
    parts = [
        "<p>Olá,</p>",
        f"<p>A atividade <strong>{escape(activity.title)}</strong> foi atribuída "
        f"por {escape(assigned_by)}.</p>",
    ]
    if activity.description:
        parts.append(f"<p>{escape(activity.description)}</p>")
    parts.append(f"<p>{details}</p>")
    parts.append(_activities_link(base_url))
    return EmailMessage(
        subject=f"Nova Atividade Atribuída: {activity.title}",
        html_content="".join(parts),
    )


def build_status_change_message(
    activity: Activity,
    *,
    old_status: str,
    new_status: str,
    changed_by: str,
    base_url: str,
) -> EmailMessage:
    html_content = "".join(
        [
            "<p>Olá,</p>",
            f"<p>O status da atividade <strong>{escape(activity.title)}</strong> "
            f"({escape(activity.area)}) foi alterado por {escape(changed_by)}.</p>",
            f"<p><strong>{escape(old_status)}</strong> → "
            f"<strong>{escape(new_status)}</strong></p>",
            _activities_link(base_url),
        ]
    )
    return EmailMessage(
        subject=f"Status Atualizado: {activity.title}",
        html_content=html_content,
    )


def build_deleted_message(activity: Activity, *, deleted_by: str, base_url: str) -> EmailMessage:
    html_content = "".join(
        [
            "<p>Olá,</p>",
            f"<p>A atividade <strong>{escape(activity.title)}</strong> "
            f"({escape(activity.area)}) foi excluída por {escape(deleted_by)}.</p>",
            _activities_link(base_url),
        ]
    )
    return EmailMessage(
        subject=f"Atividade Deletada: {activity.title}",
        html_content=html_content,
    )


def _digest_list(title: str, activities: Sequence[Activity]) -> str:
    if not activities:
        return ""
    items = []
    for activity in activities:
        suffix = f" · {escape(activity.deadline)}" if activity.deadline else ""
        items.append(
            f"<li><strong>{escape(activity.title)}</strong> ({escape(activity.area)}){suffix}</li>"
        )
    return f"<p><strong>{title}</strong></p><ul>{''.join(items)}</ul>"


def build_digest_message(
    *,
    user_name: str,
    counts: DigestCounts,
    high_priority: Sequence[Activity],
    with_deadline: Sequence[Activity],
    base_url: str,
) -> EmailMessage:
    html_content = "".join(
        [
            f"<p>Bom dia, {escape(user_name)}!</p>",
            "<p>Aqui está o resumo das suas atividades para hoje.</p>",
            f"<p><strong>Pendentes:</strong> {counts.pending}<br>"
            f"<strong>Em Andamento:</strong> {counts.in_progress}<br>"
            f"<strong>Concluídas:</strong> {counts.completed}</p>",
            _digest_list("Atividades de Alta Prioridade", high_priority),
            _digest_list("Prazos Próximos", with_deadline),
            _activities_link(base_url),
        ]
    )
    return EmailMessage(
        subject=f"Resumo Diário - {counts.active} atividades ativas",
        html_content=html_content,
    )


def build_test_message(*, user_name: str, base_url: str) -> EmailMessage:
    html_content = "".join(
        [
            f"<p>Olá, {escape(user_name)}!</p>",
            "<p>Este é um email de teste para verificar se as notificações estão "
            "funcionando corretamente.</p>",
            _activities_link(base_url),
        ]
    )
    return EmailMessage(subject="Teste de Notificação - Plano de Ação", html_content=html_content)


__all__ = [
    "DigestCounts",
    "EmailMessage",
    "build_assigned_message",
    "build_deleted_message",
    "build_digest_message",
    "build_status_change_message",
    "build_test_message",
]
