from dataclasses import dataclass

from ...domain.entities import STUDENT, PerformanceRecord, User, new_id
from ..collections import PortalRepository, PERFORMANCE
from ..dto import NewResultInput


class IRemarksWriter:
    def remarks(self, student_name: str, performance: str) -> str: ...
    def notice(self, topic: str) -> str: ...


@dataclass
class ProgressReport:
    records: list[PerformanceRecord]
    average: str


class RecordResult:
    def __init__(self, repo: PortalRepository):
        self.repo = repo

    def execute(self, data: NewResultInput) -> PerformanceRecord:
        if not data.student_id or not data.subject.strip():
            raise ValueError("Student and subject are required")
        if data.total <= 0:
            raise ValueError("Total must be positive")
        if data.score < 0 or data.score > data.total:
            raise ValueError("Score must be between 0 and total")
        student = self.repo.user(data.student_id)
        if student is None or student.role != STUDENT:
            raise LookupError("student not found")

        record = PerformanceRecord(
            id=new_id(),
            student_id=student.id,
            subject=data.subject.strip(),
            score=data.score,
            total=data.total,
            grade=data.grade,
            term=data.term,
            remarks=data.remarks,
        )
        self.repo.append(PERFORMANCE, record)
        return record


def progress_report(repo: PortalRepository, student_id: str) -> ProgressReport:
    records = [r for r in repo.read(PERFORMANCE) if r.student_id == student_id]
    if not records:
        return ProgressReport(records=[], average="0")
    average = sum(r.percent for r in records) / len(records)
    return ProgressReport(records=records, average=f"{average:.1f}")


def recent_results(repo: PortalRepository, limit: int = 5) -> list[PerformanceRecord]:
    return list(reversed(repo.read(PERFORMANCE)[-limit:]))


class GenerateRemarks:
    def __init__(self, repo: PortalRepository, writer: IRemarksWriter):
        self.repo = repo
        self.writer = writer

    def execute(self, student_id: str, subject: str, score: float, total: float, term: str) -> str:
        student = self.repo.user(student_id)
        if student is None or student.role != STUDENT:
            raise LookupError("student not found")
        performance = f"{score:g}/{total:g} in {subject} for {term}"
        return self.writer.remarks(student.name, performance)
