import random

from ...domain.entities import STUDENT, FEE_STATUSES, FeeRecord, User, new_id
from ..collections import PortalRepository, USERS, FEES
from ..dto import NewFeeInput


def generate_receipt_id(prefix: str) -> str:
    return f"{prefix}{random.randint(100000, 999999)}"


class RecordFee:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, data: NewFeeInput) -> FeeRecord:
        if not data.student_id:
            raise ValueError("Student is required")
        if not data.amount or data.amount <= 0:
            raise ValueError("Amount must be positive")
        if data.status not in FEE_STATUSES:
            raise ValueError(f"Unknown status: {data.status}")
        student = self.repo.user(data.student_id)
        if student is None or student.role != STUDENT:
            raise LookupError("student not found")

        fee = FeeRecord(
            id=new_id(),
            student_id=student.id,
            amount=data.amount,
            status=data.status,
            receipt_id=generate_receipt_id(self.repo.config().receipt_prefix),
            months=list(data.months),
        )
        self.repo.append(FEES, fee)
        return fee


def fees_for(repo: PortalRepository, actor: User) -> list[FeeRecord]:
    """Новые записи первыми."""
    fees = list(reversed(repo.read(FEES)))
    if actor.role == STUDENT:
        return [f for f in fees if f.student_id == actor.id]
    return fees


def receipt_context(repo: PortalRepository, actor: User, fee_id: str) -> tuple[FeeRecord, User | None]:
    fee = next((f for f in repo.read(FEES) if f.id == fee_id), None)
    if fee is None:
        raise LookupError("fee not found")
    if actor.role == STUDENT and fee.student_id != actor.id:
        raise PermissionError("receipt belongs to another student")
    student = next((u for u in repo.read(USERS) if u.id == fee.student_id), None)
    return fee, student
