from typing import Literal

from pydantic import BaseModel, EmailStr, Field

Role = Literal["ADMIN", "TEACHER", "STUDENT"]


class LoginReq(BaseModel):
    uid: str = Field(min_length=1)

class UserOut(BaseModel):
    id: str
    uid: str
    role: Role
    name: str
    email: str
    assigned_classes: list[str]
    is_blocked: bool
    class Config: from_attributes = True

class TokenResp(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut

class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    role: Role = "STUDENT"
    assigned_classes: list[str] = []

class ClassOut(BaseModel):
    id: str
    name: str
    teacher_id: str
    class Config: from_attributes = True

class SchoolConfigOut(BaseModel):
    name: str
    logo: str
    address: str
    contact: str
    receipt_footer: str
    receipt_prefix: str
    class Config: from_attributes = True

class SchoolConfigUpdate(BaseModel):
    name: str | None = None
    logo: str | None = None
    address: str | None = None
    contact: str | None = None
    receipt_footer: str | None = None
    receipt_prefix: str | None = None

class RoomOut(BaseModel):
    id: str
    name: str
    kind: Literal["GROUP", "DM"]
    role: Role | None = None
    class Config: from_attributes = True

class MessageCreate(BaseModel):
    text: str = Field(min_length=1)

class MessageOut(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    text: str
    timestamp: int
    class Config: from_attributes = True

class AttendanceCreate(BaseModel):
    student_id: str = Field(min_length=1)
    class_id: str = Field(min_length=1)
    status: Literal["PRESENT", "ABSENT", "LATE"]

class AttendanceOut(BaseModel):
    id: str
    student_id: str
    class_id: str
    status: str
    class Config: from_attributes = True

class RegisterRowOut(BaseModel):
    student: UserOut
    status: str | None = None
    class Config: from_attributes = True

class MyAttendanceOut(BaseModel):
    records: list[AttendanceOut]
    stats: dict[str, int]
    percentage: str

class FeeCreate(BaseModel):
    student_id: str = Field(min_length=1)
    amount: float
    status: Literal["PAID", "PENDING"] = "PAID"
    months: list[str] = []

class FeeOut(BaseModel):
    id: str
    student_id: str
    amount: float
    status: str
    receipt_id: str
    months: list[str]
    class Config: from_attributes = True

class ResultCreate(BaseModel):
    student_id: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    score: float
    total: float = 100
    grade: str = "A"
    term: str = "First Term"
    remarks: str = ""

class ResultOut(BaseModel):
    id: str
    student_id: str
    subject: str
    score: float
    total: float
    grade: str
    term: str
    remarks: str
    class Config: from_attributes = True

class ProgressReportOut(BaseModel):
    records: list[ResultOut]
    average: str
    class Config: from_attributes = True

class RemarksReq(BaseModel):
    student_id: str = Field(min_length=1)
    subject: str
    score: float
    total: float = 100
    term: str = "First Term"

class TextOut(BaseModel):
    text: str

class HomeworkCreate(BaseModel):
    class_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = ""
    subject: str = ""
    type: Literal["HOMEWORK", "NOTES"] = "HOMEWORK"

class HomeworkOut(BaseModel):
    id: str
    class_id: str
    teacher_id: str
    title: str
    description: str
    subject: str
    type: str
    class Config: from_attributes = True

class LiveClassCreate(BaseModel):
    class_id: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    link: str = Field(min_length=1)

class LiveClassOut(BaseModel):
    id: str
    class_id: str
    subject: str
    teacher_id: str
    teacher_name: str
    link: str
    is_active: bool
    class Config: from_attributes = True

class NoticeCreate(BaseModel):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: Literal["INFO", "URGENT", "EVENT"] = "INFO"
    target_role: Role | None = None

class NoticeOut(BaseModel):
    id: str
    title: str
    message: str
    type: str
    target_role: str | None = None
    class Config: from_attributes = True

class NoticeDraftReq(BaseModel):
    topic: str = Field(min_length=1)

class DashboardOut(BaseModel):
    compliance: str
    present_count: int
    student_count: int
    active_live_classes: int
    notice_count: int
    class Config: from_attributes = True
