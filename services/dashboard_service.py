"""
services/dashboard_service.py

대시보드 집계
- 건수, 최근 7일 출결 추이, 수강생 많은 과목 Top5, 담당 과목 많은 교사 Top5, 최근 항목
- 각 조회는 서로 독립적이므로 스레드풀에서 동시에 실행 (조회마다 별도 세션)
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List

from sqlalchemy import case, desc, func, select
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from database.db import Database
from models.attendance import ATTENDANCE_STATUSES, Attendance as AttendanceModel
from models.courses import Course as CourseModel
from models.enrollments import Enrollment as EnrollmentModel
from models.students import Student as StudentModel
from models.teachers import Teacher as TeacherModel
from schemas.attendance import Attendance as AttendanceSchema
from schemas.courses import Course as CourseSchema
from schemas.students import Student as StudentSchema
from schemas.teachers import Teacher as TeacherSchema
from utils.dates import last_n_days

logger = logging.getLogger(__name__)

WINDOW_DAYS = 7
TOP_LIMIT = 5


# ==========================================================
# [1단계] 개별 집계 쿼리 (세션 하나씩 사용)
# ==========================================================

def count_rows(db: Session, model, *criteria) -> int:
    return db.scalar(select(func.count(model.id)).where(*criteria)) or 0


def attendance_by_day(db: Session, days: int = WINDOW_DAYS) -> List[Dict[str, Any]]:
    """최근 days일(오늘 포함) 날짜별 상태 집계. 기록 없는 날은 0으로 채움"""
    window = last_n_days(days)
    status_sums = [
        func.sum(case((AttendanceModel.status == status, 1), else_=0)).label(status)
        for status in ATTENDANCE_STATUSES
    ]
    rows = db.execute(
        select(AttendanceModel.date, *status_sums, func.count(AttendanceModel.id).label("total"))
        .where(AttendanceModel.date >= window[0], AttendanceModel.date <= window[-1])
        .group_by(AttendanceModel.date)
    ).all()

    by_day = {}
    for row in rows:
        counts = {status: int(getattr(row, status) or 0) for status in ATTENDANCE_STATUSES}
        by_day[str(row.date)] = (counts, int(row.total or 0))

    series = []
    for day in window:
        key = day.isoformat()
        counts, total = by_day.get(key, ({status: 0 for status in ATTENDANCE_STATUSES}, 0))
        series.append({
            "date": key,
            **counts,
            "total": total,
            "ratePresent": (counts["present"] / total) if total > 0 else 0,
        })
    return series


def top_courses_by_enrollment(db: Session, limit: int = TOP_LIMIT) -> List[Dict[str, Any]]:
    enrolled = func.count(EnrollmentModel.id).label("enrolled")
    rows = db.execute(
        select(CourseModel.id, CourseModel.name, enrolled)
        .join(EnrollmentModel, EnrollmentModel.course_id == CourseModel.id)
        .where(EnrollmentModel.active.is_(True))
        .group_by(CourseModel.id, CourseModel.name)
        .order_by(desc("enrolled"), CourseModel.id)
        .limit(limit)
    ).all()
    return [{"courseId": r.id, "name": r.name, "count": r.enrolled} for r in rows]


def teacher_course_counts(db: Session, limit: int = TOP_LIMIT) -> List[Dict[str, Any]]:
    assigned = func.count(CourseModel.id).label("course_count")
    rows = db.execute(
        select(TeacherModel.id, TeacherModel.name, TeacherModel.email, assigned)
        .join(CourseModel, CourseModel.assigned_teacher_id == TeacherModel.id)
        .group_by(TeacherModel.id, TeacherModel.name, TeacherModel.email)
        .order_by(desc("course_count"), TeacherModel.id)
        .limit(limit)
    ).all()
    return [
        {"teacherId": r.id, "name": r.name, "email": r.email, "courseCount": r.course_count}
        for r in rows
    ]


def recent(db: Session, model, schema, limit: int) -> List[Dict[str, Any]]:
    items = (
        db.query(model)
        .order_by(model.created_at.desc(), model.id.desc())
        .limit(limit)
        .all()
    )
    return [schema.model_validate(item).to_json() for item in items]


# ==========================================================
# [2단계] 동시 실행 후 결합
# ==========================================================

async def build_dashboard(database: Database) -> Dict[str, Any]:
    def run(fn: Callable[..., Any], *args):
        def _call():
            with database.session() as db:
                return fn(db, *args)
        return run_in_threadpool(_call)

    (
        students, teachers, courses, enrollments_active, attendance_records,
        last7, top_courses, teacher_counts,
        recent_students, recent_teachers, recent_courses, recent_attendance,
    ) = await asyncio.gather(
        run(count_rows, StudentModel),
        run(count_rows, TeacherModel),
        run(count_rows, CourseModel),
        run(count_rows, EnrollmentModel, EnrollmentModel.active.is_(True)),
        run(count_rows, AttendanceModel),
        run(attendance_by_day),
        run(top_courses_by_enrollment),
        run(teacher_course_counts),
        run(recent, StudentModel, StudentSchema, 5),
        run(recent, TeacherModel, TeacherSchema, 5),
        run(recent, CourseModel, CourseSchema, 5),
        run(recent, AttendanceModel, AttendanceSchema, 10),
    )
    logger.debug(f"dashboard built: {students} students, {attendance_records} attendance records")

    return {
        "counts": {
            "students": students,
            "teachers": teachers,
            "courses": courses,
            "enrollmentsActive": enrollments_active,
            "attendanceRecords": attendance_records,
        },
        "attendanceLast7Days": last7,
        "topCoursesByEnrollment": top_courses,
        "teacherCourseCounts": teacher_counts,
        "recent": {
            "students": recent_students,
            "teachers": recent_teachers,
            "courses": recent_courses,
            "attendance": recent_attendance,
        },
    }
