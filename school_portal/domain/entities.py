import uuid
from dataclasses import dataclass, field

ADMIN = "ADMIN"
TEACHER = "TEACHER"
STUDENT = "STUDENT"
ROLES = (ADMIN, TEACHER, STUDENT)

UID_PREFIXES = {ADMIN: "ADM", TEACHER: "TCH", STUDENT: "STD"}

GROUP = "GROUP"
DM = "DM"

ADMIN_ROOM_ID = "ROOM_ADMINS"
ADMIN_ROOM_NAME = "Administration HQ"

ATTENDANCE_STATUSES = ("PRESENT", "ABSENT", "LATE")
FEE_STATUSES = ("PAID", "PENDING")
HOMEWORK_TYPES = ("HOMEWORK", "NOTES")
NOTICE_TYPES = ("INFO", "URGENT", "EVENT")


@dataclass(frozen=True)
class User:
    id: str
    uid: str
    role: str
    name: str
    email: str
    assigned_classes: list[str] = field(default_factory=list)
    is_blocked: bool = False

    def shares_class_with(self, other: "User") -> bool:
        return any(cid in other.assigned_classes for cid in self.assigned_classes)


@dataclass(frozen=True)
class SchoolClass:
    id: str
    name: str
    teacher_id: str


@dataclass(frozen=True)
class Message:
    id: str
    sender_id: str
    receiver_id: str
    text: str
    timestamp: int


@dataclass(frozen=True)
class Room:
    """Канал чата; вычисляется для зрителя, не хранится."""
    id: str
    name: str
    kind: str
    role: str | None = None


@dataclass(frozen=True)
class Attendance:
    id: str
    student_id: str
    class_id: str
    status: str


@dataclass(frozen=True)
class FeeRecord:
    id: str
    student_id: str
    amount: float
    status: str
    receipt_id: str
    months: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PerformanceRecord:
    id: str
    student_id: str
    subject: str
    score: float
    total: float
    grade: str
    term: str
    remarks: str = ""

    @property
    def percent(self) -> float:
        return self.score / self.total * 100 if self.total else 0.0


@dataclass(frozen=True)
class Homework:
    id: str
    class_id: str
    teacher_id: str
    title: str
    description: str
    subject: str
    type: str = "HOMEWORK"


@dataclass(frozen=True)
class LiveClass:
    id: str
    class_id: str
    subject: str
    teacher_id: str
    teacher_name: str
    link: str
    is_active: bool = True


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    type: str = "INFO"
    target_role: str | None = None


@dataclass(frozen=True)
class SchoolConfig:
    name: str
    logo: str
    address: str
    contact: str
    receipt_footer: str
    receipt_prefix: str


def new_id() -> str:
    return uuid.uuid4().hex[:10]
