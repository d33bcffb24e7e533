from datetime import datetime
from typing import Any, List

from pydantic import Field

from schemas.common import CamelModel, ORMModel
from schemas.courses import Course
from schemas.students import Student


# ✅ 수강 등록/해제 요청: { course, students[], hard? }
class EnrollmentChange(CamelModel):
    course: Any = None
    students: List[Any] = Field(default_factory=list)
    hard: bool = False


class Enrollment(ORMModel):
    id: int
    student: Student
    course: Course
    active: bool
    enrolled_at: datetime
    created_at: datetime
