"""
샘플 교사/학생/과목/수강/최근 10일 출결 데이터 생성
사용법: python -m scripts.seed_school
- 출결과 수강은 일괄 upsert 로 쓰므로 여러 번 실행해도 중복 행이 생기지 않음
"""

import random
from datetime import timedelta

from database.db import create_database, utcnow
from models.attendance import Attendance as AttendanceModel
from models.courses import Course as CourseModel
from models.enrollments import Enrollment as EnrollmentModel
from models.students import Student as StudentModel
from models.teachers import Teacher as TeacherModel
from services.bulk_write import UpsertOp, bulk_upsert
from utils.dates import last_n_days

TEACHERS = [
    ("Grace Hopper", "Computer Science"),
    ("Ada Lovelace", "Mathematics"),
    ("Marie Curie", "Chemistry"),
    ("Rosalind Franklin", "Biology"),
    ("Carl Sagan", "Physics"),
]
COURSES = [
    ("Intro to Programming", 4, 0),
    ("Algebra II", 3, 1),
    ("Calculus", 4, 1),
    ("General Chemistry", 3, 2),
    ("Biology I", 3, 3),
    ("Astronomy", 2, 4),
]
STUDENT_COUNT = 100
ATTENDANCE_DAYS = 10


def random_status() -> str:
    r = random.random()
    if r < 0.75:
        return "present"
    if r < 0.85:
        return "late"
    if r < 0.95:
        return "excused"
    return "absent"


def _get_or_create(db, model, lookup: dict, **values):
    row = db.query(model).filter_by(**lookup).one_or_none()
    if row is None:
        row = model(**lookup, **values)
        db.add(row)
        db.flush()
    return row


def seed_school():
    database = create_database()
    if database is None:
        raise SystemExit("[seed] DATABASE_URL missing in .env")

    now = utcnow()
    with database.session() as db:
        teachers = [
            _get_or_create(
                db, TeacherModel,
                {"email": f"{name.split()[0].lower()}@school.local"},
                name=name, subject_specialty=subject, hire_date=now - timedelta(days=365 * 3),
            )
            for name, subject in TEACHERS
        ]
        courses = [
            _get_or_create(
                db, CourseModel, {"name": name},
                credits=credits, assigned_teacher_id=teachers[teacher_idx].id,
            )
            for name, credits, teacher_idx in COURSES
        ]
        students = [
            _get_or_create(
                db, StudentModel, {"email": f"student{i:03d}@school.local"},
                name=f"Student {i:03d}",
                grade=str(6 + i % 7),
                enrollment_date=now - timedelta(days=30 * (i % 12)),
                parent_contact=f"+1-555-{1000 + i}",
                first_name="Student",
                last_name=f"{i:03d}",
            )
            for i in range(1, STUDENT_COUNT + 1)
        ]
        db.commit()
        print(f"✅ 교사 {len(teachers)}명, 과목 {len(courses)}개, 학생 {len(students)}명 준비 완료")

        enrollment_ops = [
            UpsertOp(key={"course_id": course.id, "student_id": student.id}, values={"active": True, "enrolled_at": now})
            for course in courses
            for student in random.sample(students, k=30)
        ]
        result = bulk_upsert(db, EnrollmentModel, enrollment_ops)
        print(f"✅ 수강 등록: {result.upserted_count} 신규, {result.matched_count} 기존")

        attendance_ops = []
        for day in last_n_days(ATTENDANCE_DAYS):
            for op in enrollment_ops:
                status = random_status()
                remarks = {"late": "Came late", "excused": "Medical leave"}.get(status)
                attendance_ops.append(
                    UpsertOp(
                        key={**op.key, "date": day},
                        values={"status": status, "remarks": remarks},
                    )
                )
        result = bulk_upsert(db, AttendanceModel, attendance_ops)
        print(f"✅ 출결 기록: {result.upserted_count} 신규, {result.modified_count} 수정, 오류 {len(result.write_errors)}건")

    database.dispose()


if __name__ == "__main__":
    seed_school()
