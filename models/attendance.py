from sqlalchemy import Column, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base, TimestampMixin

ATTENDANCE_STATUSES = ("present", "absent", "late", "excused")


class Attendance(TimestampMixin, Base):
    __tablename__ = "attendance"  # 출결 기록 테이블
    __table_args__ = (
        # ✅ 학생/과목/날짜 당 한 행 → 같은 날 재입력은 덮어쓰기
        UniqueConstraint("student_id", "course_id", "date", name="uq_attendance_student_course_date"),
    )

    id = Column(Integer, primary_key=True, index=True)                                   # 출결 고유 ID (Primary Key)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)  # 학생 ID
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)    # 과목 ID
    date = Column(Date, nullable=False, index=True)                                      # 날짜 (UTC 기준 일 단위)
    status = Column(String(20), nullable=False)                                          # present / absent / late / excused
    remarks = Column(String(500))                                                        # 비고

    student = relationship("Student", lazy="joined")
    course = relationship("Course", lazy="joined")
