from ...domain.entities import User
from ..collections import PortalRepository, USERS

INVALID_UID = "Authorization Error: Invalid Identity Credential (UID)."
SUSPENDED = "Security Restriction: Your access has been suspended."


class LoginByUid:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, uid: str) -> User:
        uid = uid.strip()
        user = next((u for u in self.repo.read(USERS) if u.uid == uid), None)
        if user is None:
            raise ValueError(INVALID_UID)
        if user.is_blocked:
            raise PermissionError(SUSPENDED)
        return user
