from ...domain.entities import ROLES, NOTICE_TYPES, Notification, User, new_id
from ..collections import PortalRepository, NOTIFICATIONS


class PostNotice:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, title: str, message: str, type: str = "INFO",
                target_role: str | None = None) -> Notification:
        if not title.strip() or not message.strip():
            raise ValueError("Title and message are required")
        if type not in NOTICE_TYPES:
            raise ValueError(f"Unknown type: {type}")
        if target_role is not None and target_role not in ROLES:
            raise ValueError(f"Unknown role: {target_role}")
        notice = Notification(id=new_id(), title=title.strip(), message=message.strip(),
                              type=type, target_role=target_role)
        self.repo.append(NOTIFICATIONS, notice)
        return notice


def notices_for(repo: PortalRepository, actor: User) -> list[Notification]:
    return [n for n in repo.read(NOTIFICATIONS) if n.target_role in (None, actor.role)]
