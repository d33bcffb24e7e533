from sqlalchemy import Boolean, Column, Date, DateTime, Integer, JSON, String
from database.db import Base, TimestampMixin


class Student(TimestampMixin, Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                  # 고유 학생 ID (Primary Key)
    name = Column(String(100), nullable=False)                         # 학생 이름
    email = Column(String(255), nullable=False, unique=True)           # 이메일 (학생 간 중복 불가)
    grade = Column(String(20), nullable=False)                         # 학년
    enrollment_date = Column(DateTime(timezone=True), nullable=False)  # 입학일
    parent_contact = Column(String(100), nullable=False)               # 보호자 연락처

    # 확장 프로필 (선택)
    first_name = Column(String(100))
    last_name = Column(String(100))
    dob = Column(Date)
    gender = Column(String(20))
    nationality = Column(String(100))
    contact_no = Column(String(50))
    photo_url = Column(String(500))
    admission_no = Column(String(50))
    roll_no = Column(String(50))
    blood_group = Column(String(10))
    category = Column(String(50))
    religion = Column(String(50))
    student_address = Column(String(500))
    address_same_as_student = Column(Boolean, default=False, nullable=False)

    parent = Column(JSON)                                              # 보호자 정보 {name, email, mobile, occupation, address}
    meta = Column(JSON)                                                # 자유 형식 추가 정보
