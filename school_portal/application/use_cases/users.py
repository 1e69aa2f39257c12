import random
from dataclasses import replace

from ...domain.entities import ADMIN, TEACHER, STUDENT, ROLES, UID_PREFIXES, User, new_id
from ..collections import PortalRepository, USERS, CLASSES
from ..dto import NewUserInput

STUDENT_CLASS_RULE = "Students must be assigned to exactly ONE class."
TEACHER_CLASS_RULE = "Teachers must be assigned to at least ONE class."
UID_ATTEMPTS = 1000


def generate_uid(role: str, taken: set[str]) -> str:
    prefix = UID_PREFIXES[role]
    for _ in range(UID_ATTEMPTS):
        uid = f"{prefix}-{random.randint(1000, 9999)}"
        if uid not in taken:
            return uid
    raise ValueError(f"No free {prefix} codes left")


class RegisterUser:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, data: NewUserInput) -> User:
        if data.role not in ROLES:
            raise ValueError(f"Unknown role: {data.role}")
        if not data.name.strip():
            raise ValueError("Name is required")

        classes = list(dict.fromkeys(data.assigned_classes))
        if data.role == STUDENT and len(classes) != 1:
            raise ValueError(STUDENT_CLASS_RULE)
        if data.role == TEACHER and not classes:
            raise ValueError(TEACHER_CLASS_RULE)
        if data.role == ADMIN and classes:
            raise ValueError("Administrators are not assigned to classes.")

        known = {c.id for c in self.repo.read(CLASSES)}
        for cid in classes:
            if cid not in known:
                raise ValueError(f"Unknown class: {cid}")

        users = self.repo.read(USERS)
        user = User(
            id=new_id(),
            uid=generate_uid(data.role, {u.uid for u in users}),
            role=data.role,
            name=data.name.strip(),
            email=data.email,
            assigned_classes=classes,
            is_blocked=False,
        )
        self.repo.write(USERS, users + [user])
        return user


class ToggleBlock:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, user_id: str) -> User:
        users = self.repo.read(USERS)
        target = next((u for u in users if u.id == user_id), None)
        if target is None:
            raise LookupError("user not found")
        updated = replace(target, is_blocked=not target.is_blocked)
        self.repo.write(USERS, [updated if u.id == user_id else u for u in users])
        return updated
