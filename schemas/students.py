from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import Field

from schemas.common import CamelModel, FlexibleDatetime, ORMModel, RequiredStr


class ParentInfo(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    occupation: Optional[str] = None
    address: Optional[str] = None


# ✅ 입력용 (POST)
class StudentCreate(CamelModel):
    name: RequiredStr                               # 학생 이름
    email: RequiredStr                              # 이메일 (유니크)
    grade: RequiredStr                              # 학년
    parent_contact: RequiredStr                     # 보호자 연락처
    enrollment_date: FlexibleDatetime = None        # 없으면 현재 시각

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    contact_no: Optional[str] = None
    photo_url: Optional[str] = None
    admission_no: Optional[str] = None
    roll_no: Optional[str] = None
    blood_group: Optional[str] = None
    category: Optional[str] = None
    religion: Optional[str] = None
    student_address: Optional[str] = None
    address_same_as_student: bool = False

    parent: Optional[ParentInfo] = None
    meta: Optional[Dict[str, Any]] = None


# ✅ 출력용 (GET, 생성 응답 등)
class Student(ORMModel):
    id: int
    name: str
    email: str
    grade: str
    enrollment_date: datetime
    parent_contact: str

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    contact_no: Optional[str] = None
    photo_url: Optional[str] = None
    admission_no: Optional[str] = None
    roll_no: Optional[str] = None
    blood_group: Optional[str] = None
    category: Optional[str] = None
    religion: Optional[str] = None
    student_address: Optional[str] = None
    address_same_as_student: bool = False

    parent: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = Field(default=None)

    created_at: datetime
    updated_at: datetime
