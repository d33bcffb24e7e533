from datetime import datetime

from schemas.common import CamelModel, FlexibleDatetime, ORMModel, RequiredStr


# ✅ 입력용 스키마: 교사 정보를 새로 생성할 때 사용 (POST)
class TeacherCreate(CamelModel):
    name: RequiredStr                        # 교사 이름
    email: RequiredStr                       # 이메일 주소 (유니크)
    subject_specialty: RequiredStr           # 전공 과목
    hire_date: FlexibleDatetime = None       # 임용일 (없으면 현재 시각)


# ✅ 출력용 스키마: 교사 정보를 조회할 때 사용 (GET 응답 등)
class Teacher(ORMModel):
    id: int
    name: str
    email: str
    subject_specialty: str
    hire_date: datetime
    created_at: datetime
    updated_at: datetime
