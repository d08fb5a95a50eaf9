"""End-to-end tests for the activity, comment and audit endpoints."""

from __future__ import annotations

from io import BytesIO

from openpyxl import Workbook, load_workbook

from app.domain.entities import EVENT_ASSIGNED, EVENT_DELETED, EVENT_STATUS_CHANGE


def _create(client, headers, **fields):
    payload = {"title": "Auditoria interna", "area": "Qualidade", **fields}
    return client.post("/activities/", json=payload, headers=headers)


def test_activity_lifecycle(client, login, owner, notifier) -> None:
    headers = login(owner.email)

    response = _create(client, headers, responsible="Ana", priority=0)
    assert response.status_code == 201
    created = response.json()
    assert created["user_id"] == owner.id
    assert created["status"] == "pending"
    assert created["deleted_at"] is None

    response = client.put(
        f"/activities/{created['id']}", json={"status": "completed"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    response = client.delete(f"/activities/{created['id']}", headers=headers)
    assert response.status_code == 204
    assert client.get(f"/activities/{created['id']}", headers=headers).status_code == 404
    assert client.get("/activities/", headers=headers).json() == []

    assert notifier.events() == [EVENT_ASSIGNED, EVENT_STATUS_CHANGE, EVENT_DELETED]
    status_change = notifier.notifications[1]
    assert (status_change.old_status, status_change.new_status) == ("Pendente", "Concluído")


def test_duplicate_returns_structured_conflict(client, login, owner) -> None:
    headers = login(owner.email)
    assert _create(client, headers, title="X", area="A").status_code == 201

    response = _create(client, headers, title="x", area="a")

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["kind"] == "conflict"
    assert detail["details"] == {"title": "x", "area": "a"}
    assert '"x"' in detail["message"] and '"a"' in detail["message"]


def test_invalid_payload_is_unprocessable(client, login, owner) -> None:
    headers = login(owner.email)

    assert _create(client, headers, priority=5).status_code == 422
    assert _create(client, headers, status="done").status_code == 422
    assert _create(client, headers, unknown="x").status_code == 422


def test_strangers_are_forbidden(client, login, owner, other_user) -> None:
    created = _create(client, login(owner.email)).json()
    stranger = login(other_user.email)

    assert client.get(f"/activities/{created['id']}", headers=stranger).status_code == 403
    response = client.put(
        f"/activities/{created['id']}", json={"title": "Hack"}, headers=stranger
    )
    assert response.status_code == 403
    assert response.json()["detail"]["kind"] == "forbidden"
    assert client.delete(f"/activities/{created['id']}", headers=stranger).status_code == 403
    assert client.get(f"/activities/?owner_id={owner.id}", headers=stranger).status_code == 403


def test_admin_may_list_and_edit_other_users_activities(client, login, owner, admin) -> None:
    created = _create(client, login(owner.email)).json()
    headers = login(admin.email)

    listed = client.get(f"/activities/?owner_id={owner.id}", headers=headers)
    assert [item["id"] for item in listed.json()] == [created["id"]]

    response = client.put(
        f"/activities/{created['id']}", json={"priority": 2}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["user_id"] == owner.id


def test_list_filters_and_summary(client, login, owner) -> None:
    headers = login(owner.email)
    _create(client, headers, title="A", status="completed", priority=0)
    _create(client, headers, title="B", area="TI")

    completed = client.get("/activities/?status=completed", headers=headers).json()
    assert [item["title"] for item in completed] == ["A"]
    by_area = client.get("/activities/?area=TI", headers=headers).json()
    assert [item["title"] for item in by_area] == ["B"]

    summary = client.get("/activities/summary", headers=headers).json()
    assert summary["total"] == 2
    assert summary["by_status"]["completed"] == 1
    assert summary["by_priority"]["0"] == 1
    assert summary["by_area"] == {"Qualidade": 1, "TI": 1}


def test_export_returns_workbook(client, login, owner) -> None:
    headers = login(owner.email)
    _create(client, headers, status="in_progress")

    response = client.get("/activities/export", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "atividades_" in response.headers["content-disposition"]
    worksheet = load_workbook(BytesIO(response.content)).active
    assert worksheet.cell(row=2, column=1).value == "Auditoria interna"
    assert worksheet.cell(row=2, column=5).value == "Em Andamento"


def test_upload_then_import(client, login, owner) -> None:
    headers = login(owner.email)
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.append(["Título", "Área", "Prioridade", "Status"])
    worksheet.append(["Inventário", "Logística", "Alta", "Pendente"])
    worksheet.append(["inventário", "LOGÍSTICA", "Baixa", "Concluído"])
    buffer = BytesIO()
    workbook.save(buffer)

    upload = client.post(
        "/activities/upload",
        files={"file": ("plano.xlsx", buffer.getvalue(), "application/octet-stream")},
        headers=headers,
    )
    assert upload.status_code == 200
    parsed = upload.json()
    assert parsed["count"] == 2
    assert parsed["activities"][0]["priority"] == 0

    response = client.post(
        "/activities/import", json={"activities": parsed["activities"]}, headers=headers
    )
    assert response.status_code == 201
    result = response.json()
    assert result["first_use"] is True
    assert result["imported"] == 1
    assert result["skipped"][0]["reason"] == "duplicada"

    again = client.post(
        "/activities/import", json={"activities": parsed["activities"][:1]}, headers=headers
    )
    assert again.status_code == 403


def test_upload_rejects_unknown_format(client, login, owner) -> None:
    response = client.post(
        "/activities/upload",
        files={"file": ("plano.txt", b"hello", "text/plain")},
        headers=login(owner.email),
    )

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "validation_error"


def test_comment_endpoints(client, login, owner, admin) -> None:
    headers = login(owner.email)
    activity = _create(client, headers).json()

    response = client.post(
        f"/activities/{activity['id']}/comments", json={"content": "Primeiro"}, headers=headers
    )
    assert response.status_code == 201
    comment = response.json()
    assert comment["user_name"] == "Olivia Owner"

    admin_headers = login(admin.email)
    edited = client.put(
        f"/comments/{comment['id']}", json={"content": "Moderado"}, headers=admin_headers
    )
    assert edited.status_code == 200
    assert edited.json()["content"] == "Moderado"

    listed = client.get(f"/activities/{activity['id']}/comments", headers=headers).json()
    assert [item["content"] for item in listed] == ["Moderado"]

    assert client.delete(f"/comments/{comment['id']}", headers=headers).status_code == 204
    assert client.get(f"/activities/{activity['id']}/comments", headers=headers).json() == []


def test_audit_log_is_admin_only(client, login, owner, admin) -> None:
    activity = _create(client, login(owner.email)).json()

    assert client.get("/audit-logs/", headers=login(owner.email)).status_code == 403

    response = client.get(
        f"/audit-logs/?entity_type=Activity&entity_id={activity['id']}",
        headers=login(admin.email),
    )
    assert response.status_code == 200
    [entry] = response.json()
    assert entry["action"] == "CREATE"
    assert entry["user_email"] == owner.email
