import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from ....application.collections import PortalRepository, USERS, CLASSES, MESSAGES
from ....application.sync import PollingSync
from ....application.use_cases.chat import ListRooms, OpenRoom, SendMessage
from ....config import settings
from ....domain.entities import User
from ....domain.visibility import find_room, messages_for
from ....infrastructure.metrics import messages_sent_total, poll_ticks_total
from ..authz import get_current_user, user_from_token
from ..deps import get_repository
from ..schemas import MessageCreate, MessageOut, RoomOut

router = APIRouter(prefix="/api/chat", tags=["chat"])
logger = structlog.get_logger()

@router.get("/rooms", response_model=list[RoomOut])
def list_rooms(user: User = Depends(get_current_user),
               repo: PortalRepository = Depends(get_repository)):
    return ListRooms(repo).execute(user)

@router.get("/rooms/{room_id}/messages", response_model=list[MessageOut])
def room_messages(room_id: str,
                  user: User = Depends(get_current_user),
                  repo: PortalRepository = Depends(get_repository)):
    try:
        return OpenRoom(repo).execute(user, room_id)
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

@router.post("/rooms/{room_id}/messages", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(room_id: str, payload: MessageCreate,
                 user: User = Depends(get_current_user),
                 repo: PortalRepository = Depends(get_repository)):
    try:
        message = SendMessage(repo).execute(user, room_id, payload.text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    messages_sent_total.inc()
    logger.info("message_sent", sender_id=user.id, receiver_id=room_id)
    return message

def _live_messages(repo: PortalRepository, user_id: str, room_id: str):
    """Сообщения комнаты глазами пользователя или None, если комната ему больше не видна."""
    user = repo.user(user_id)
    if user is None or user.is_blocked:
        return None
    room = find_room(room_id, user, repo.read(USERS), repo.read(CLASSES))
    if room is None:
        return None
    return messages_for(room, user, repo.read(MESSAGES))

@router.websocket("/rooms/{room_id}/live")
async def room_live(websocket: WebSocket, room_id: str,
                    token: str = Query(...),
                    repo: PortalRepository = Depends(get_repository)):
    """Каждые CHAT_POLL_SECONDS отправляет полный список сообщений комнаты.

    Видимость комнаты пересчитывается на каждом тике; потерявший доступ
    подписчик получает закрытие 1008.
    """
    user = user_from_token(token, repo)
    if user is None or _live_messages(repo, user.id, room_id) is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()

    async def push(snapshot):
        try:
            if snapshot is None:
                logger.info("chat_access_revoked", user_id=user.id, room_id=room_id)
                sync.halt()
                await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
                return
            poll_ticks_total.labels(view="chat").inc()
            await websocket.send_json([MessageOut.model_validate(m).model_dump() for m in snapshot])
        except (WebSocketDisconnect, RuntimeError):
            logger.info("chat_client_gone", user_id=user.id, room_id=room_id)
            sync.halt()

    sync = PollingSync(
        name="chat",
        read=lambda: _live_messages(repo, user.id, room_id),
        on_snapshot=push,
        interval=settings.CHAT_POLL_SECONDS,
    )
    sync.start()
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("chat_unsubscribed", user_id=user.id, room_id=room_id, ticks=sync.ticks)
    finally:
        await sync.stop()
