import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from ....application.collections import PortalRepository
from ....application.sync import PollingSync
from ....application.use_cases.attendance import MarkAttendance, ClassRegister, student_attendance
from ....config import settings
from ....domain.entities import STUDENT, User
from ....infrastructure.metrics import attendance_marked_total, poll_ticks_total
from ..authz import require_staff, require_student, user_from_token
from ..deps import get_repository
from ..schemas import AttendanceCreate, AttendanceOut, RegisterRowOut, MyAttendanceOut

router = APIRouter(prefix="/api/attendance", tags=["attendance"])
logger = structlog.get_logger()

def _register(repo: PortalRepository, user: User, class_id: str) -> list[RegisterRowOut]:
    try:
        rows = ClassRegister(repo).execute(user, class_id)
    except LookupError as e:
        raise HTTPException(404, str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return [RegisterRowOut.model_validate(r) for r in rows]

def _my_attendance(repo: PortalRepository, user: User) -> MyAttendanceOut:
    summary = student_attendance(repo, user.id)
    return MyAttendanceOut(records=[AttendanceOut.model_validate(r) for r in summary.records],
                           stats=summary.stats, percentage=summary.percentage)

def _live_snapshot(repo: PortalRepository, user_id: str, class_id: str | None):
    """Снимок для подписчика или None, если доступ к нему уже потерян."""
    user = repo.user(user_id)
    if user is None or user.is_blocked:
        return None
    if user.role == STUDENT:
        return _my_attendance(repo, user).model_dump()
    if not class_id:
        return None
    try:
        rows = ClassRegister(repo).execute(user, class_id)
    except (LookupError, PermissionError):
        return None
    return [RegisterRowOut.model_validate(r).model_dump() for r in rows]

@router.post("", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def mark_attendance(payload: AttendanceCreate,
                    user: User = Depends(require_staff),
                    repo: PortalRepository = Depends(get_repository)):
    try:
        record = MarkAttendance(repo).execute(user, payload.student_id, payload.class_id, payload.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(404, str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    attendance_marked_total.labels(status=record.status).inc()
    logger.info("attendance_marked", by=user.id, student_id=record.student_id,
                class_id=record.class_id, status=record.status)
    return record

@router.get("/classes/{class_id}", response_model=list[RegisterRowOut])
def class_register(class_id: str,
                   user: User = Depends(require_staff),
                   repo: PortalRepository = Depends(get_repository)):
    return _register(repo, user, class_id)

@router.get("/my", response_model=MyAttendanceOut)
def my_attendance(user: User = Depends(require_student),
                  repo: PortalRepository = Depends(get_repository)):
    return _my_attendance(repo, user)

@router.websocket("/live")
async def attendance_live(websocket: WebSocket,
                          token: str = Query(...),
                          class_id: str | None = Query(None),
                          repo: PortalRepository = Depends(get_repository)):
    """Staff получает журнал класса, ученик свои отметки; раз в ATTENDANCE_POLL_SECONDS.

    Доступ проверяется на каждом тике: заблокированный пользователь или
    учитель без этого класса получает закрытие 1008.
    """
    user = user_from_token(token, repo)
    if user is None or _live_snapshot(repo, user.id, class_id) is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    await websocket.accept()

    async def push(snapshot):
        try:
            if snapshot is None:
                logger.info("attendance_access_revoked", user_id=user.id, class_id=class_id)
                sync.halt()
                await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
                return
            poll_ticks_total.labels(view="attendance").inc()
            await websocket.send_json(snapshot)
        except (WebSocketDisconnect, RuntimeError):
            sync.halt()

    sync = PollingSync(name="attendance",
                       read=lambda: _live_snapshot(repo, user.id, class_id),
                       on_snapshot=push,
                       interval=settings.ATTENDANCE_POLL_SECONDS)
    sync.start()
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("attendance_unsubscribed", user_id=user.id, class_id=class_id, ticks=sync.ticks)
    finally:
        await sync.stop()
