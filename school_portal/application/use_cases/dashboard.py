from ...domain.entities import STUDENT
from ..collections import PortalRepository, USERS, ATTENDANCE, LIVE_CLASSES, NOTIFICATIONS
from ..dto import DashboardMetrics


def compute_dashboard_metrics(repo: PortalRepository) -> DashboardMetrics:
    students = [u for u in repo.read(USERS) if u.role == STUDENT]
    present = sum(1 for a in repo.read(ATTENDANCE) if a.status in ("PRESENT", "LATE"))
    compliance = present / len(students) * 100 if students else 0.0
    return DashboardMetrics(
        compliance=f"{compliance:.1f}",
        present_count=present,
        student_count=len(students),
        active_live_classes=sum(1 for s in repo.read(LIVE_CLASSES) if s.is_active),
        notice_count=len(repo.read(NOTIFICATIONS)),
    )
