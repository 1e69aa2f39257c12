from dataclasses import dataclass

from ...domain.entities import ADMIN, TEACHER, STUDENT, ATTENDANCE_STATUSES, Attendance, User, new_id
from ..collections import PortalRepository, USERS, CLASSES, ATTENDANCE


@dataclass
class RegisterRow:
    student: User
    status: str | None


def ensure_manages_class(repo: PortalRepository, actor: User, class_id: str) -> None:
    if actor.role == ADMIN:
        if not any(c.id == class_id for c in repo.read(CLASSES)):
            raise LookupError("class not found")
        return
    if actor.role == TEACHER and class_id in actor.assigned_classes:
        return
    raise PermissionError("class is not assigned to you")


def students_of(repo: PortalRepository, class_id: str) -> list[User]:
    return [u for u in repo.read(USERS) if u.role == STUDENT and class_id in u.assigned_classes]


class MarkAttendance:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, actor: User, student_id: str, class_id: str, status: str) -> Attendance:
        if status not in ATTENDANCE_STATUSES:
            raise ValueError(f"Unknown status: {status}")
        ensure_manages_class(self.repo, actor, class_id)
        if not any(s.id == student_id for s in students_of(self.repo, class_id)):
            raise ValueError("student is not enrolled in this class")
        record = Attendance(id=new_id(), student_id=student_id, class_id=class_id, status=status)
        self.repo.append(ATTENDANCE, record)
        return record


class ClassRegister:
    """Ученики класса с последней отметкой каждого."""

    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, actor: User, class_id: str) -> list[RegisterRow]:
        ensure_manages_class(self.repo, actor, class_id)
        latest: dict[str, str] = {}
        for record in self.repo.read(ATTENDANCE):
            if record.class_id == class_id:
                latest[record.student_id] = record.status
        return [RegisterRow(student=s, status=latest.get(s.id)) for s in students_of(self.repo, class_id)]


@dataclass
class StudentAttendance:
    records: list[Attendance]
    stats: dict[str, int]
    percentage: str


def student_attendance(repo: PortalRepository, student_id: str) -> StudentAttendance:
    """Отметки ученика, счётчики по статусам и процент посещаемости.

    LATE идёт за половину присутствия; без отметок процент "100".
    """
    records = [a for a in repo.read(ATTENDANCE) if a.student_id == student_id]
    stats = {status.lower(): 0 for status in ATTENDANCE_STATUSES}
    for r in records:
        stats[r.status.lower()] += 1
    if not records:
        percentage = "100"
    else:
        percentage = f"{(stats['present'] + stats['late'] * 0.5) / len(records) * 100:.1f}"
    return StudentAttendance(records=records, stats=stats, percentage=percentage)
