"""Tests for email dispatch, delivery logging and background notification."""

from __future__ import annotations

import threading
import time

import pytest

from app.application.use_cases.activities import create_activity
from app.application.use_cases.notifications import (
    ActivityNotification,
    ActivityNotifier,
    NotificationDispatcher,
    compose_activity_message,
    list_email_logs,
    send_daily_digest,
)
from app.application.use_cases.notifications.dispatcher import SKIPPED_BY_PREFERENCES
from app.application.errors import NotificationError
from app.domain.entities import (
    EMAIL_STATUS_FAILED,
    EMAIL_STATUS_SENT,
    EVENT_ASSIGNED,
    EVENT_DIGEST,
    EVENT_REPORT,
    EVENT_STATUS_CHANGE,
    Activity,
)
from app.infrastructure.database import SessionLocal
from app.infrastructure.email import (
    EMAIL_NOT_CONFIGURED_ERROR,
    TransportResult,
    UnconfiguredTransport,
)
from app.infrastructure.notifications import NotificationQueue
from app.infrastructure.repositories import NotificationPreferencesRepository


def _dispatch(session, transport, user, event_type=EVENT_ASSIGNED):
    return NotificationDispatcher(session, transport).dispatch(
        user.id, event_type, 7, user.email, "Assunto", "<p>Corpo</p>"
    )


def test_unconfigured_transport_records_failed_attempt(session, owner) -> None:
    result = _dispatch(session, UnconfiguredTransport(), owner)

    assert result.success is False
    assert result.error == EMAIL_NOT_CONFIGURED_ERROR
    logs = list_email_logs(session, user_id=owner.id)
    assert len(logs) == 1
    assert logs[0].status == EMAIL_STATUS_FAILED
    assert logs[0].error == EMAIL_NOT_CONFIGURED_ERROR
    assert logs[0].activity_id == 7


def test_successful_delivery_records_sent_attempt(session, owner, transport) -> None:
    result = _dispatch(session, transport, owner)

    assert result.success is True
    assert result.message_id == "msg-1"
    assert transport.sent == [("owner@example.com", "Assunto", "<p>Corpo</p>")]
    [entry] = list_email_logs(session, user_id=owner.id)
    assert entry.status == EMAIL_STATUS_SENT
    assert entry.error is None
    assert entry.email_type == EVENT_ASSIGNED


def test_raising_transport_is_logged_not_propagated(session, owner, caplog) -> None:
    class ExplodingTransport:
        configured = True

        def send(self, to, subject, html_content):
            raise ConnectionError("smtp down")

    with caplog.at_level("ERROR"):
        result = _dispatch(session, ExplodingTransport(), owner)

    assert result.success is False
    assert result.error == "smtp down"
    [entry] = list_email_logs(session, user_id=owner.id)
    assert entry.status == EMAIL_STATUS_FAILED
    assert "Email transport raised" in caplog.text


def test_refused_by_preferences_sends_and_logs_nothing(session, owner, transport) -> None:
    repository = NotificationPreferencesRepository(session)
    repository.get_or_create(owner.id)
    repository.update(owner.id, {"weekly_report": False})

    result = _dispatch(session, transport, owner, EVENT_REPORT)

    assert result.success is False
    assert result.skipped == SKIPPED_BY_PREFERENCES
    assert transport.sent == []
    assert list_email_logs(session, user_id=owner.id) == []


def test_deliver_bypasses_preferences(session, owner, transport) -> None:
    repository = NotificationPreferencesRepository(session)
    repository.get_or_create(owner.id)
    repository.update(owner.id, {"activity_assigned": False})

    result = NotificationDispatcher(session, transport).deliver(
        owner.id, EVENT_ASSIGNED, None, owner.email, "Teste", "<p>Oi</p>"
    )

    assert result.success is True
    assert len(list_email_logs(session, user_id=owner.id)) == 1


def _activity(**overrides) -> Activity:
    values = {
        "id": 3,
        "user_id": 1,
        "title": "Auditoria <interna>",
        "area": "Qualidade",
        "priority": 0,
        "status": "pending",
        "responsible": "Ana",
    }
    values.update(overrides)
    return Activity(**values)


def test_compose_status_change_message_escapes_and_labels() -> None:
    message = compose_activity_message(
        ActivityNotification(
            event_type=EVENT_STATUS_CHANGE,
            activity=_activity(),
            actor_name="Bruno",
            old_status="Pendente",
            new_status="Concluído",
        ),
        base_url="https://plano.example.com/",
    )

    assert message.subject == "Status Atualizado: Auditoria <interna>"
    assert "Auditoria &lt;interna&gt;" in message.html_content
    assert "Pendente" in message.html_content
    assert "Concluído" in message.html_content
    assert "https://plano.example.com/dashboard/activities" in message.html_content


def test_compose_rejects_events_without_activity_message() -> None:
    with pytest.raises(NotificationError):
        compose_activity_message(
            ActivityNotification(event_type=EVENT_DIGEST, activity=_activity(), actor_name="x"),
            base_url="http://localhost",
        )


def test_deliver_now_sends_to_the_activity_owner(owner, transport) -> None:
    notifier = ActivityNotifier(
        transport=transport,
        queue=NotificationQueue(1),
        base_url="http://localhost:3000",
    )

    result = notifier.deliver_now(
        ActivityNotification(
            event_type=EVENT_ASSIGNED,
            activity=_activity(user_id=owner.id),
            actor_name="Bruno",
        )
    )

    assert result is not None and result.success is True
    assert transport.sent[0][0] == owner.email
    assert transport.sent[0][1] == "Nova Atividade Atribuída: Auditoria <interna>"


def test_deliver_now_swallows_missing_recipient(transport, caplog) -> None:
    notifier = ActivityNotifier(
        transport=transport, queue=NotificationQueue(1), base_url="http://localhost"
    )

    with caplog.at_level("ERROR"):
        result = notifier.deliver_now(
            ActivityNotification(
                event_type=EVENT_ASSIGNED, activity=_activity(user_id=404), actor_name="x"
            )
        )

    assert result is None
    assert transport.sent == []
    assert "Failed to deliver" in caplog.text


def test_mutation_does_not_wait_for_a_hanging_transport(session, owner) -> None:
    release = threading.Event()

    class HangingTransport:
        configured = True

        def __init__(self) -> None:
            self.calls = 0

        def send(self, to, subject, html_content):
            self.calls += 1
            release.wait(timeout=5)
            return TransportResult(message_id="late")

    transport = HangingTransport()
    queue = NotificationQueue(1)
    notifier = ActivityNotifier(
        transport=transport, queue=queue, base_url="http://localhost", session_factory=SessionLocal
    )

    started = time.monotonic()
    created = create_activity(
        session,
        owner=owner,
        fields={"title": "Inventário", "area": "Logística", "responsible": "Caio"},
        notifier=notifier,
    )
    elapsed = time.monotonic() - started

    assert created.id is not None
    assert elapsed < 2
    release.set()
    queue.shutdown(wait=True)

    assert transport.calls == 1
    with SessionLocal() as check_session:
        [entry] = list_email_logs(check_session, user_id=owner.id)
    assert entry.status == EMAIL_STATUS_SENT
    assert entry.activity_id == created.id


def test_queue_logs_failing_jobs(caplog) -> None:
    queue = NotificationQueue(1)

    def failing_job():
        raise RuntimeError("boom")

    with caplog.at_level("ERROR"):
        future = queue.submit(failing_job)
        assert future is not None
        assert future.result(timeout=5) is None
        queue.shutdown(wait=True)

    assert "Notification job" in caplog.text
    assert queue.submit(failing_job) is None


def test_full_backlog_drops_jobs_while_transport_hangs(session, owner, caplog) -> None:
    release = threading.Event()

    class HangingTransport:
        configured = True

        def __init__(self) -> None:
            self.calls = 0

        def send(self, to, subject, html_content):
            self.calls += 1
            release.wait(timeout=5)
            return TransportResult(message_id="late")

    transport = HangingTransport()
    queue = NotificationQueue(1, max_pending=2)
    notifier = ActivityNotifier(
        transport=transport, queue=queue, base_url="http://localhost", session_factory=SessionLocal
    )

    with caplog.at_level("WARNING"):
        for index in range(4):
            create_activity(
                session,
                owner=owner,
                fields={"title": f"Tarefa {index}", "area": "Ops", "responsible": "Caio"},
                notifier=notifier,
            )

    assert caplog.text.count("Notification backlog is full") == 2
    release.set()
    queue.shutdown(wait=True)

    assert transport.calls == 2
    with SessionLocal() as check_session:
        assert len(list_email_logs(check_session, user_id=owner.id)) == 2


def test_backlog_slot_is_freed_when_a_job_finishes() -> None:
    queue = NotificationQueue(1, max_pending=1)

    first = queue.submit(lambda: "done")
    assert first is not None
    assert first.result(timeout=5) == "done"

    second = queue.submit(lambda: "again")
    assert second is not None
    assert second.result(timeout=5) == "again"
    queue.shutdown(wait=True)


def test_daily_digest_counts_open_work(session, owner, transport) -> None:
    for title, status, priority, deadline in [
        ("A", "pending", 0, "Amanhã"),
        ("B", "in_progress", 1, None),
        ("C", "completed", 0, "Ontem"),
    ]:
        create_activity(
            session,
            owner=owner,
            fields={
                "title": title,
                "area": "Ops",
                "status": status,
                "priority": priority,
                "deadline": deadline,
            },
            notifier=None,
        )

    result = send_daily_digest(session, user=owner, transport=transport, base_url="http://x")

    assert result.success is True
    [(to, subject, body)] = transport.sent
    assert to == owner.email
    assert subject == "Resumo Diário - 2 atividades ativas"
    assert "<strong>A</strong>" in body
    assert "<strong>C</strong>" not in body
    [entry] = list_email_logs(session, user_id=owner.id)
    assert entry.email_type == EVENT_DIGEST
