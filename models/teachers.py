from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from database.db import Base, TimestampMixin


class Teacher(TimestampMixin, Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)              # 교사 고유 ID (PK)
    name = Column(String(100), nullable=False)                      # 교사 이름
    email = Column(String(255), nullable=False, unique=True)        # 이메일 (교사 간 중복 불가)
    subject_specialty = Column(String(100), nullable=False)         # 전공 과목
    hire_date = Column(DateTime(timezone=True), nullable=False)     # 임용일

    # ✅ 이 교사가 맡은 과목들 (1:N 관계)
    courses = relationship("Course", back_populates="assigned_teacher")
