from ...domain.entities import STUDENT, HOMEWORK_TYPES, Homework, User, new_id
from ..collections import PortalRepository, HOMEWORK
from ..dto import NewHomeworkInput


class PublishHomework:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, teacher: User, data: NewHomeworkInput) -> Homework:
        if not data.title.strip() or not data.class_id:
            raise ValueError("Title and class are required")
        if data.type not in HOMEWORK_TYPES:
            raise ValueError(f"Unknown type: {data.type}")
        if data.class_id not in teacher.assigned_classes:
            raise PermissionError("class is not assigned to you")

        item = Homework(
            id=new_id(),
            class_id=data.class_id,
            teacher_id=teacher.id,
            title=data.title.strip(),
            description=data.description,
            subject=data.subject,
            type=data.type,
        )
        self.repo.append(HOMEWORK, item)
        return item


def homework_for(repo: PortalRepository, actor: User) -> list[Homework]:
    items = repo.read(HOMEWORK)
    if actor.role == STUDENT:
        return [h for h in items if h.class_id in actor.assigned_classes]
    return [h for h in items if h.teacher_id == actor.id]
