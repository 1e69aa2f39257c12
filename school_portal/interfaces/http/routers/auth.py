import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ....application.collections import PortalRepository
from ....application.use_cases.login import LoginByUid
from ....domain.entities import User
from ....infrastructure.security import create_access_token
from ....config import settings
from ..authz import get_current_user
from ..deps import get_repository
from ..schemas import LoginReq, TokenResp, UserOut

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = structlog.get_logger()

limiter = Limiter(key_func=get_remote_address)

@router.get("/health")
def health():
    return {"status": "ok"}

# UID не секрет, поэтому перебор ограничиваем по IP
@router.post("/login", response_model=TokenResp)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
def login(
    request: Request,
    payload: LoginReq,
    repo: PortalRepository = Depends(get_repository),
):
    try:
        user = LoginByUid(repo).execute(payload.uid)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    logger.info("login", user_id=user.id, role=user.role)
    token = create_access_token(sub=user.id, role=user.role)
    return TokenResp(access_token=token, user=UserOut.model_validate(user))

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user
