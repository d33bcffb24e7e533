from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from database.db import Base, TimestampMixin


class Course(TimestampMixin, Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)      # 과목 고유 ID (PK)
    name = Column(String(200), nullable=False)              # 과목명
    description = Column(Text)                              # 설명
    credits = Column(Float, nullable=False, default=3)      # 학점 (기본 3)

    # ✅ 담당 교사 ID (FK, 선택)
    assigned_teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="SET NULL"), index=True)

    # ✅ 담당 교사와의 관계 (N:1)
    assigned_teacher = relationship("Teacher", back_populates="courses", lazy="joined")
