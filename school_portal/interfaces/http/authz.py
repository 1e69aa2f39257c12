from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from ...application.collections import PortalRepository
from ...application.use_cases.login import SUSPENDED
from ...domain.entities import ADMIN, TEACHER, STUDENT, User
from ...infrastructure.security import decode_token
from .deps import get_repository

bearer = HTTPBearer()

def get_user_id(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> str:
    try:
        return decode_token(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

def get_current_user(user_id: str = Depends(get_user_id),
                     repo: PortalRepository = Depends(get_repository)) -> User:
    # блокировка действует сразу, а не после истечения токена
    user = repo.user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    if user.is_blocked:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=SUSPENDED)
    return user

def require_roles(*roles: str):
    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail=f"{' or '.join(r.title() for r in roles)} required")
        return user
    return dependency

require_admin = require_roles(ADMIN)
require_teacher = require_roles(TEACHER)
require_staff = require_roles(ADMIN, TEACHER)
require_student = require_roles(STUDENT)

def user_from_token(token: str, repo: PortalRepository) -> User | None:
    """Для websocket: заголовков нет, токен приходит в query."""
    try:
        user = repo.user(decode_token(token))
    except JWTError:
        return None
    if user is None or user.is_blocked:
        return None
    return user
