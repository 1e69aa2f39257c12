from fastapi import APIRouter, Depends, HTTPException, status

from ....application.collections import PortalRepository
from ....application.dto import NewHomeworkInput
from ....application.use_cases.homework import PublishHomework, homework_for
from ....domain.entities import TEACHER, STUDENT, User
from ..authz import require_roles, require_teacher
from ..deps import get_repository
from ..schemas import HomeworkCreate, HomeworkOut

router = APIRouter(prefix="/api/homework", tags=["homework"])

@router.get("", response_model=list[HomeworkOut])
def list_homework(user: User = Depends(require_roles(TEACHER, STUDENT)),
                  repo: PortalRepository = Depends(get_repository)):
    return homework_for(repo, user)

@router.post("", response_model=HomeworkOut, status_code=status.HTTP_201_CREATED)
def publish_homework(payload: HomeworkCreate,
                     user: User = Depends(require_teacher),
                     repo: PortalRepository = Depends(get_repository)):
    try:
        return PublishHomework(repo).execute(user, NewHomeworkInput(**payload.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
