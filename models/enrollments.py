from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base, TimestampMixin, utcnow


class Enrollment(TimestampMixin, Base):
    __tablename__ = "enrollments"  # 수강 등록 테이블
    __table_args__ = (
        # ✅ 학생-과목 조합당 한 행
        UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    active = Column(Boolean, nullable=False, default=True)                  # False = 수강 취소(soft)
    enrolled_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    student = relationship("Student", lazy="joined")
    course = relationship("Course", lazy="joined")
