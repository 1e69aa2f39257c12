import pytest
from starlette.websockets import WebSocketDisconnect

from school_portal.config import settings
from conftest import token_of


def test_student_rooms(client, login):
    """Тест списка комнат ученика: группа класса, затем админ и учитель"""
    response = client.get("/api/chat/rooms", headers=login("STD-001"))
    assert response.status_code == 200
    rooms = response.json()
    assert [(r["id"], r["kind"]) for r in rooms] == [
        ("ROOM_CLASS-001", "GROUP"), ("1", "DM"), ("2", "DM"),
    ]
    assert rooms[0]["name"] == "Grade 1 Group"
    assert rooms[2]["role"] == "TEACHER"


def test_admin_rooms(client, login):
    rooms = client.get("/api/chat/rooms", headers=login("ADM-001")).json()
    assert rooms[0] == {"id": "ROOM_ADMINS", "name": "Administration HQ", "kind": "GROUP", "role": None}
    assert len(rooms) == 10


def test_teacher_rooms(client, login):
    rooms = client.get("/api/chat/rooms", headers=login("TCH-001")).json()
    groups = [r for r in rooms if r["kind"] == "GROUP"]
    assert len(groups) == 10
    assert len(rooms) == 19


def test_group_message_visible_to_classmates_only(client, login):
    teacher = login("TCH-001")
    response = client.post("/api/chat/rooms/ROOM_CLASS-001/messages", json={"text": "  Test tomorrow  "},
                           headers=teacher)
    assert response.status_code == 201
    message = response.json()
    assert message["text"] == "Test tomorrow"
    assert message["sender_id"] == "2"
    assert message["receiver_id"] == "ROOM_CLASS-001"

    response = client.get("/api/chat/rooms/ROOM_CLASS-001/messages", headers=login("STD-001"))
    assert [m["id"] for m in response.json()] == [message["id"]]

    response = client.get("/api/chat/rooms/ROOM_CLASS-001/messages", headers=login("STD-002"))
    assert response.status_code == 403


def test_direct_messages_between_two_users(client, login):
    student = login("STD-001")
    teacher = login("TCH-001")
    client.post("/api/chat/rooms/2/messages", json={"text": "question"}, headers=student)
    client.post("/api/chat/rooms/s2/messages", json={"text": "for ananya"}, headers=teacher)
    client.post("/api/chat/rooms/s1/messages", json={"text": "answer"}, headers=teacher)

    texts = [m["text"] for m in client.get("/api/chat/rooms/2/messages", headers=student).json()]
    assert texts == ["question", "answer"]
    texts = [m["text"] for m in client.get("/api/chat/rooms/s1/messages", headers=teacher).json()]
    assert texts == ["question", "answer"]


def test_cannot_post_to_invisible_room(client, login):
    student = login("STD-001")
    assert client.post("/api/chat/rooms/s2/messages", json={"text": "hi"}, headers=student).status_code == 403
    assert client.post("/api/chat/rooms/ROOM_ADMINS/messages", json={"text": "hi"},
                       headers=student).status_code == 403


def test_blank_message_rejected(client, login):
    student = login("STD-001")
    response = client.post("/api/chat/rooms/ROOM_CLASS-001/messages", json={"text": "   "}, headers=student)
    assert response.status_code == 400
    response = client.post("/api/chat/rooms/ROOM_CLASS-001/messages", json={"text": ""}, headers=student)
    assert response.status_code == 422


def test_blocked_peer_disappears_from_rooms(client, login):
    admin = login("ADM-001")
    client.post("/api/users/2/toggle-block", headers=admin)
    rooms = client.get("/api/chat/rooms", headers=login("STD-001")).json()
    assert [r["id"] for r in rooms] == ["ROOM_CLASS-001", "1"]


def test_live_room_pushes_full_snapshots(client, login, monkeypatch):
    """Тест websocket: сначала текущий снимок, после записи новый полный снимок"""
    monkeypatch.setattr(settings, "CHAT_POLL_SECONDS", 0.05)
    student = login("STD-001")
    with client.websocket_connect(f"/api/chat/rooms/ROOM_CLASS-001/live?token={token_of(student)}") as ws:
        assert ws.receive_json() == []
        client.post("/api/chat/rooms/ROOM_CLASS-001/messages", json={"text": "hello"}, headers=student)
        snapshot = []
        for _ in range(100):
            snapshot = ws.receive_json()
            if snapshot:
                break
        assert [m["text"] for m in snapshot] == ["hello"]


def test_live_room_rejects_invisible_room(client, login):
    token = token_of(login("STD-001"))
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(f"/api/chat/rooms/ROOM_CLASS-002/live?token={token}") as ws:
            ws.receive_json()
    assert exc.value.code == 1008


def test_live_room_rejects_bad_token(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/api/chat/rooms/ROOM_CLASS-001/live?token=garbage") as ws:
            ws.receive_json()


def test_live_room_closes_when_user_blocked(client, login, monkeypatch):
    """Тест: после блокировки подписка закрывается и новые сообщения не приходят"""
    monkeypatch.setattr(settings, "CHAT_POLL_SECONDS", 0.05)
    student = login("STD-001")
    admin = login("ADM-001")
    teacher = login("TCH-001")
    received = []
    with client.websocket_connect(f"/api/chat/rooms/ROOM_CLASS-001/live?token={token_of(student)}") as ws:
        assert ws.receive_json() == []
        assert client.post("/api/users/s1/toggle-block", headers=admin).json()["is_blocked"] is True
        client.post("/api/chat/rooms/ROOM_CLASS-001/messages", json={"text": "secret"}, headers=teacher)
        with pytest.raises(WebSocketDisconnect) as exc:
            for _ in range(100):
                received.append(ws.receive_json())
    assert exc.value.code == 1008
    assert all(snapshot == [] for snapshot in received)
