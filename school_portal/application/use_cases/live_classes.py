from ...domain.entities import STUDENT, TEACHER, LiveClass, User, new_id
from ..collections import PortalRepository, LIVE_CLASSES


class StartLiveClass:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, teacher: User, class_id: str, subject: str, link: str) -> LiveClass:
        if not subject.strip() or not link.strip():
            raise ValueError("Subject and link are required")
        if class_id not in teacher.assigned_classes:
            raise PermissionError("class is not assigned to you")
        session = LiveClass(
            id=new_id(),
            class_id=class_id,
            subject=subject.strip(),
            teacher_id=teacher.id,
            teacher_name=teacher.name,
            link=link.strip(),
            is_active=True,
        )
        self.repo.append(LIVE_CLASSES, session)
        return session


def live_classes_for(repo: PortalRepository, actor: User) -> list[LiveClass]:
    sessions = repo.read(LIVE_CLASSES)
    if actor.role == STUDENT:
        return [s for s in sessions if s.is_active and s.class_id in actor.assigned_classes]
    if actor.role == TEACHER:
        return [s for s in sessions if s.teacher_id == actor.id]
    return sessions
