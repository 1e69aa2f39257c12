import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from ....application.collections import PortalRepository, USERS
from ....application.dto import NewUserInput
from ....application.use_cases.users import RegisterUser, ToggleBlock
from ..authz import require_admin
from ..deps import get_repository
from ..schemas import UserCreate, UserOut

router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(require_admin)])
logger = structlog.get_logger()

@router.get("", response_model=list[UserOut])
def list_users(repo: PortalRepository = Depends(get_repository)):
    return repo.read(USERS)

@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, repo: PortalRepository = Depends(get_repository)):
    data = NewUserInput(name=payload.name, email=payload.email, role=payload.role,
                        assigned_classes=payload.assigned_classes)
    try:
        user = RegisterUser(repo).execute(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("user_created", user_id=user.id, uid=user.uid, role=user.role)
    return user

@router.post("/{user_id}/toggle-block", response_model=UserOut)
def toggle_block(user_id: str, repo: PortalRepository = Depends(get_repository)):
    try:
        user = ToggleBlock(repo).execute(user_id)
    except LookupError:
        raise HTTPException(404, "user not found")
    logger.info("user_block_toggled", user_id=user.id, is_blocked=user.is_blocked)
    return user
