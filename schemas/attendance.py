import datetime as dt
from typing import Any, List, Optional

from pydantic import Field

from schemas.common import CamelModel, ORMModel
from schemas.courses import Course
from schemas.students import Student


class AttendanceEntry(CamelModel):
    student: Any = None                       # 학생 ID
    status: Any = None                        # present / absent / late / excused
    remarks: Optional[str] = None             # 비고


# ✅ 일괄 출결 입력: { course, date, entries[] }
class AttendanceMark(CamelModel):
    course: Any = None
    date: Any = None
    entries: List[AttendanceEntry] = Field(default_factory=list)


# ✅ 단건 수정: { id, status?, remarks? }
class AttendanceUpdate(CamelModel):
    id: Any = None
    status: Optional[str] = None
    remarks: Optional[str] = None


# ✅ 삭제: { id } 또는 { course, date }
class AttendanceDelete(CamelModel):
    id: Any = None
    course: Any = None
    date: Any = None


class Attendance(ORMModel):
    id: int                                  # 출결 고유 ID
    student: Student                         # 학생
    course: Course                           # 과목
    date: dt.date                            # 날짜
    status: str                              # 출결 상태
    remarks: Optional[str] = None            # 비고
    created_at: dt.datetime
    updated_at: dt.datetime
