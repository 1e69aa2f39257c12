from fastapi import APIRouter, Depends, HTTPException, status

from ....application.collections import PortalRepository
from ....application.use_cases.notices import PostNotice, notices_for
from ....application.use_cases.results import IRemarksWriter
from ....domain.entities import User
from ..authz import get_current_user, require_admin
from ..deps import get_repository, get_remarks_writer
from ..schemas import NoticeCreate, NoticeOut, NoticeDraftReq, TextOut

router = APIRouter(prefix="/api/notices", tags=["notices"])

@router.get("", response_model=list[NoticeOut])
def list_notices(user: User = Depends(get_current_user),
                 repo: PortalRepository = Depends(get_repository)):
    return notices_for(repo, user)

@router.post("", response_model=NoticeOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def post_notice(payload: NoticeCreate, repo: PortalRepository = Depends(get_repository)):
    try:
        return PostNotice(repo).execute(payload.title, payload.message, payload.type, payload.target_role)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/draft", response_model=TextOut, dependencies=[Depends(require_admin)])
def draft_notice(payload: NoticeDraftReq, writer: IRemarksWriter = Depends(get_remarks_writer)):
    return TextOut(text=writer.notice(payload.topic))
