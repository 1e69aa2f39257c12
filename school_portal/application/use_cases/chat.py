import time

from ...domain.entities import Message, Room, User, new_id
from ...domain.visibility import visible_rooms, find_room, messages_for
from ..collections import PortalRepository, USERS, CLASSES, MESSAGES

ROOM_FORBIDDEN = "room is not available"


class ListRooms:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, actor: User) -> list[Room]:
        return visible_rooms(actor, self.repo.read(USERS), self.repo.read(CLASSES))


class OpenRoom:
    """Комната и её сообщения так, как их видит actor."""

    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def room(self, actor: User, room_id: str) -> Room:
        room = find_room(room_id, actor, self.repo.read(USERS), self.repo.read(CLASSES))
        if room is None:
            raise PermissionError(ROOM_FORBIDDEN)
        return room

    def execute(self, actor: User, room_id: str) -> list[Message]:
        room = self.room(actor, room_id)
        return messages_for(room, actor, self.repo.read(MESSAGES))


class SendMessage:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, actor: User, room_id: str, text: str) -> Message:
        text = text.strip()
        if not text:
            raise ValueError("Message text is required")
        OpenRoom(self.repo).room(actor, room_id)
        message = Message(
            id=new_id(),
            sender_id=actor.id,
            receiver_id=room_id,
            text=text,
            timestamp=int(time.time() * 1000),
        )
        self.repo.append(MESSAGES, message)
        return message
