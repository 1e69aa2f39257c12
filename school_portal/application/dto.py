from dataclasses import dataclass, field


@dataclass
class NewUserInput:
    name: str
    email: str
    role: str
    assigned_classes: list[str] = field(default_factory=list)


@dataclass
class NewFeeInput:
    student_id: str
    amount: float
    status: str = "PAID"
    months: list[str] = field(default_factory=list)


@dataclass
class NewResultInput:
    student_id: str
    subject: str
    score: float
    total: float = 100
    grade: str = "A"
    term: str = "First Term"
    remarks: str = ""


@dataclass
class NewHomeworkInput:
    class_id: str
    title: str
    description: str = ""
    subject: str = ""
    type: str = "HOMEWORK"


@dataclass
class DashboardMetrics:
    compliance: str
    present_count: int
    student_count: int
    active_live_classes: int
    notice_count: int
