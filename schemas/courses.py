import math
from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, Field

from schemas.common import CamelModel, ORMModel, RequiredStr
from schemas.teachers import Teacher

DEFAULT_CREDITS = 3


def _coerce_credits(value: Any) -> float:
    # 숫자로 변환할 수 없으면 기본 학점
    if isinstance(value, bool):
        return DEFAULT_CREDITS
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CREDITS
    return number if math.isfinite(number) else DEFAULT_CREDITS


Credits = Annotated[float, BeforeValidator(_coerce_credits)]


class CourseCreate(CamelModel):
    name: RequiredStr                                # 과목명
    description: Optional[str] = None                # 설명
    credits: Credits = DEFAULT_CREDITS               # 학점
    assigned_teacher: Optional[Any] = Field(default=None)   # 담당 교사 ID (선택)


class Course(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    credits: float
    assigned_teacher_id: Optional[int] = None
    assigned_teacher: Optional[Teacher] = None       # 담당 교사 (populate)
    created_at: datetime
    updated_at: datetime
