from fastapi import APIRouter, Depends, HTTPException, status

from ....application.collections import PortalRepository
from ....application.use_cases.live_classes import StartLiveClass, live_classes_for
from ....domain.entities import User
from ..authz import get_current_user, require_teacher
from ..deps import get_repository
from ..schemas import LiveClassCreate, LiveClassOut

router = APIRouter(prefix="/api/live-classes", tags=["live-classes"])

@router.get("", response_model=list[LiveClassOut])
def list_live_classes(user: User = Depends(get_current_user),
                      repo: PortalRepository = Depends(get_repository)):
    return live_classes_for(repo, user)

@router.post("", response_model=LiveClassOut, status_code=status.HTTP_201_CREATED)
def start_live_class(payload: LiveClassCreate,
                     user: User = Depends(require_teacher),
                     repo: PortalRepository = Depends(get_repository)):
    try:
        return StartLiveClass(repo).execute(user, payload.class_id, payload.subject, payload.link)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
