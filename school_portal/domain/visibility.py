"""Правила видимости комнат чата.

Комнаты не хранятся: для каждого зрителя они заново выводятся из снимка
пользователей и классов. Сообщение в комнату, которую зритель не может
вывести, ему не показывается.
"""
from typing import Iterable, Sequence

from .entities import (
    ADMIN, TEACHER, STUDENT, GROUP, DM, ADMIN_ROOM_ID, ADMIN_ROOM_NAME,
    User, SchoolClass, Message, Room,
)


def class_room_id(class_id: str) -> str:
    return f"ROOM_{class_id}"


def can_message(actor: User, peer: User) -> bool:
    if actor.role == ADMIN:
        return True
    if peer.role == ADMIN:
        return actor.role in (TEACHER, STUDENT)
    if actor.role == TEACHER:
        return peer.role == STUDENT and peer.shares_class_with(actor)
    if actor.role == STUDENT:
        return peer.role == TEACHER and actor.shares_class_with(peer)
    return False


def visible_rooms(actor: User, users: Iterable[User], classes: Iterable[SchoolClass]) -> list[Room]:
    names = {c.id: c.name for c in classes}
    rooms: list[Room] = []

    if actor.role == ADMIN:
        rooms.append(Room(id=ADMIN_ROOM_ID, name=ADMIN_ROOM_NAME, kind=GROUP))

    for class_id in actor.assigned_classes:
        name = names.get(class_id) or class_id
        rooms.append(Room(id=class_room_id(class_id), name=f"{name} Group", kind=GROUP))

    for u in users:
        if u.id == actor.id or u.is_blocked:
            continue
        if can_message(actor, u):
            rooms.append(Room(id=u.id, name=u.name, kind=DM, role=u.role))

    return rooms


def find_room(room_id: str, actor: User, users: Iterable[User],
              classes: Iterable[SchoolClass]) -> Room | None:
    for room in visible_rooms(actor, users, classes):
        if room.id == room_id:
            return room
    return None


def messages_for(room: Room, actor: User, messages: Sequence[Message]) -> list[Message]:
    if room.kind == GROUP:
        return [m for m in messages if m.receiver_id == room.id]
    return [
        m for m in messages
        if (m.sender_id == actor.id and m.receiver_id == room.id)
        or (m.sender_id == room.id and m.receiver_id == actor.id)
    ]
