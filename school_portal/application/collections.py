"""Типизированные коллекции поверх key-value хранилища.

Каждая коллекция хранится одним JSON-документом под своим ключом. Пока ключа
нет, чтение возвращает начальные данные (seed), ничего не записывая.
Запись всегда перезаписывает коллекцию целиком.
"""
from dataclasses import dataclass, asdict
from typing import Any, Callable, Generic, TypeVar

from ..domain.entities import (
    ADMIN, TEACHER, STUDENT,
    User, SchoolClass, Message, Attendance, FeeRecord, PerformanceRecord,
    Homework, LiveClass, Notification, SchoolConfig,
)

T = TypeVar("T")


class IKeyValueStore:
    def get(self, key: str) -> Any | None: ...
    def set(self, key: str, value: Any) -> None: ...


@dataclass(frozen=True)
class Collection(Generic[T]):
    key: str
    record_type: type
    seed: Callable[[], list]


def _seed_classes() -> list[SchoolClass]:
    grades = [(f"CLASS-00{i}", f"Grade {i}", "2") for i in range(1, 9)]
    grades += [
        ("CLASS-101", "Grade 10-A", "2"),
        ("CLASS-102", "Grade 10-B", "2"),
        ("CLASS-103", "Grade 11-A", "4"),
    ]
    return [SchoolClass(id=cid, name=name, teacher_id=tid) for cid, name, tid in grades]


_SEED_STUDENTS = [
    ("s1", "STD-001", "Aarav Kumar", "aarav"),
    ("s2", "STD-002", "Ananya Singh", "ananya"),
    ("s3", "STD-003", "Ishaan Sharma", "ishaan"),
    ("s4", "STD-004", "Saanvi Gupta", "saanvi"),
    ("s5", "STD-005", "Arjun Verma", "arjun"),
    ("s6", "STD-006", "Riya Patel", "riya"),
    ("s7", "STD-007", "Vivaan Reddy", "vivaan"),
    ("s8", "STD-008", "Diya Malhotra", "diya"),
]


def _seed_users() -> list[User]:
    users = [
        User(id="1", uid="ADM-001", role=ADMIN, name="Admin User", email="admin@rps.edu"),
        User(id="2", uid="TCH-001", role=TEACHER, name="John Smith", email="john@rps.edu",
             assigned_classes=[f"CLASS-00{i}" for i in range(1, 9)] + ["CLASS-101", "CLASS-102"]),
    ]
    for n, (sid, uid, name, login) in enumerate(_SEED_STUDENTS, start=1):
        users.append(User(id=sid, uid=uid, role=STUDENT, name=name, email=f"{login}@rps.edu",
                          assigned_classes=[f"CLASS-00{n}"]))
    return users


USERS = Collection("rps_users", User, _seed_users)
CLASSES = Collection("rps_classes", SchoolClass, _seed_classes)
NOTIFICATIONS = Collection("rps_notifications", Notification, lambda: [
    Notification(id="1", title="Welcome to RPS", message="The school portal is now active.", type="INFO"),
])
FEES = Collection("rps_fees", FeeRecord, lambda: [
    FeeRecord(id="f1", student_id="s1", amount=5000, status="PAID", receipt_id="778301380", months=["April"]),
])
LIVE_CLASSES = Collection("rps_live_classes", LiveClass, lambda: [
    LiveClass(id="l1", class_id="CLASS-101", subject="Physics - Optics", teacher_id="2",
              teacher_name="John Smith", link="https://meet.google.com", is_active=True),
])
PERFORMANCE = Collection("rps_performance", PerformanceRecord, lambda: [
    PerformanceRecord(id="p1", student_id="s1", subject="Mathematics", score=95, total=100, grade="A+",
                      term="First Term", remarks="Student shows exceptional analytical skills."),
])
HOMEWORK = Collection("rps_homework", Homework, lambda: [
    Homework(id="hw1", class_id="CLASS-101", teacher_id="2", title="Trigonometry Assignment",
             description="Complete exercises from the textbook.", subject="Mathematics", type="HOMEWORK"),
])
ATTENDANCE = Collection("rps_attendance", Attendance, list)
MESSAGES = Collection("rps_messages", Message, list)

CONFIG_KEY = "rps_config"
DEFAULT_CONFIG = SchoolConfig(
    name="Real Public School",
    logo="https://picsum.photos/seed/school/200/200",
    address="Chhapiya Buzurg, Siwan",
    contact="+91 7783091380",
    receipt_footer="This is a computer-generated receipt. Signature not required.",
    receipt_prefix="778",
)


class PortalRepository:
    def __init__(self, store: IKeyValueStore):
        self.store = store

    def read(self, collection: Collection[T]) -> list[T]:
        rows = self.store.get(collection.key)
        if rows is None:
            return collection.seed()
        return [collection.record_type(**row) for row in rows]

    def write(self, collection: Collection[T], records: list[T]) -> None:
        self.store.set(collection.key, [asdict(r) for r in records])

    def append(self, collection: Collection[T], record: T) -> list[T]:
        records = self.read(collection) + [record]
        self.write(collection, records)
        return records

    def user(self, user_id: str) -> User | None:
        return next((u for u in self.read(USERS) if u.id == user_id), None)

    def config(self) -> SchoolConfig:
        data = self.store.get(CONFIG_KEY)
        return SchoolConfig(**data) if data is not None else DEFAULT_CONFIG

    def save_config(self, config: SchoolConfig) -> None:
        self.store.set(CONFIG_KEY, asdict(config))
