import pytest
from starlette.websockets import WebSocketDisconnect

from school_portal.config import settings
from conftest import token_of


def mark(client, headers, student_id, class_id, status):
    return client.post("/api/attendance", headers=headers,
                       json={"student_id": student_id, "class_id": class_id, "status": status})


def test_teacher_marks_own_class(client, login):
    """Тест отметки посещаемости учителем своего класса"""
    response = mark(client, login("TCH-001"), "s1", "CLASS-001", "PRESENT")
    assert response.status_code == 201
    data = response.json()
    assert data["student_id"] == "s1"
    assert data["status"] == "PRESENT"
    assert data["id"]


def test_teacher_cannot_mark_foreign_class(client, login):
    assert mark(client, login("TCH-001"), "s1", "CLASS-103", "PRESENT").status_code == 403


def test_admin_marks_any_class_but_unknown_class_is_404(client, login):
    admin = login("ADM-001")
    assert mark(client, admin, "s2", "CLASS-002", "LATE").status_code == 201
    assert mark(client, admin, "s2", "CLASS-999", "LATE").status_code == 404


def test_student_must_belong_to_class(client, login):
    assert mark(client, login("TCH-001"), "s2", "CLASS-001", "PRESENT").status_code == 400


def test_invalid_status(client, login):
    assert mark(client, login("TCH-001"), "s1", "CLASS-001", "SICK").status_code == 422


def test_students_cannot_mark(client, login):
    assert mark(client, login("STD-001"), "s1", "CLASS-001", "PRESENT").status_code == 403


def test_register_shows_latest_status(client, login):
    teacher = login("TCH-001")
    mark(client, teacher, "s1", "CLASS-001", "ABSENT")
    mark(client, teacher, "s1", "CLASS-001", "LATE")

    response = client.get("/api/attendance/classes/CLASS-001", headers=teacher)
    assert response.status_code == 200
    rows = response.json()
    assert [(r["student"]["id"], r["status"]) for r in rows] == [("s1", "LATE")]

    rows = client.get("/api/attendance/classes/CLASS-002", headers=teacher).json()
    assert [(r["student"]["id"], r["status"]) for r in rows] == [("s2", None)]


def test_student_sees_own_records_and_stats(client, login):
    teacher = login("TCH-001")
    mark(client, teacher, "s1", "CLASS-001", "PRESENT")
    mark(client, teacher, "s1", "CLASS-001", "LATE")
    mark(client, teacher, "s2", "CLASS-002", "ABSENT")

    response = client.get("/api/attendance/my", headers=login("STD-001"))
    assert response.status_code == 200
    data = response.json()
    assert [r["status"] for r in data["records"]] == ["PRESENT", "LATE"]
    assert data["stats"] == {"present": 1, "absent": 0, "late": 1}
    assert data["percentage"] == "75.0"


def test_live_register_for_teacher(client, login, monkeypatch):
    monkeypatch.setattr(settings, "ATTENDANCE_POLL_SECONDS", 0.05)
    teacher = login("TCH-001")
    url = f"/api/attendance/live?token={token_of(teacher)}&class_id=CLASS-001"
    with client.websocket_connect(url) as ws:
        first = ws.receive_json()
        assert [(r["student"]["id"], r["status"]) for r in first] == [("s1", None)]
        mark(client, teacher, "s1", "CLASS-001", "PRESENT")
        rows = first
        for _ in range(100):
            rows = ws.receive_json()
            if rows[0]["status"]:
                break
        assert rows[0]["status"] == "PRESENT"


def test_live_for_student(client, login):
    student = login("STD-002")
    with client.websocket_connect(f"/api/attendance/live?token={token_of(student)}") as ws:
        data = ws.receive_json()
    assert data == {"records": [], "stats": {"present": 0, "absent": 0, "late": 0}, "percentage": "100"}


def test_live_rejects_foreign_class(client, login):
    token = token_of(login("TCH-001"))
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/api/attendance/live?token={token}&class_id=CLASS-103") as ws:
            ws.receive_json()


def test_live_register_closes_when_teacher_blocked(client, login, monkeypatch):
    monkeypatch.setattr(settings, "ATTENDANCE_POLL_SECONDS", 0.05)
    teacher = login("TCH-001")
    url = f"/api/attendance/live?token={token_of(teacher)}&class_id=CLASS-001"
    with client.websocket_connect(url) as ws:
        ws.receive_json()
        client.post("/api/users/2/toggle-block", headers=login("ADM-001"))
        with pytest.raises(WebSocketDisconnect) as exc:
            for _ in range(100):
                ws.receive_json()
    assert exc.value.code == 1008


def test_attendance_percentage_counts_late_as_half(client, login):
    """Тест процента: LATE засчитывается наполовину"""
    teacher = login("TCH-001")
    mark(client, teacher, "s1", "CLASS-001", "PRESENT")
    mark(client, teacher, "s1", "CLASS-001", "LATE")
    mark(client, teacher, "s1", "CLASS-001", "ABSENT")

    data = client.get("/api/attendance/my", headers=login("STD-001")).json()
    # (1 + 0.5) / 3
    assert data["percentage"] == "50.0"


def test_attendance_percentage_without_records(client, login):
    data = client.get("/api/attendance/my", headers=login("STD-003")).json()
    assert data["records"] == []
    assert data["percentage"] == "100"
