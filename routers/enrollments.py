import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from database.db import utcnow
from dependencies.database import get_db
from dependencies.security import authorize
from models.enrollments import Enrollment as EnrollmentModel
from schemas.enrollments import Enrollment, EnrollmentChange
from services.bulk_write import UpsertOp, bulk_upsert
from utils.exceptions import BadRequestError
from utils.ids import parse_id, valid_ids
from utils.rbac import RequirePermission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


def _validate_change(body: EnrollmentChange):
    course_id = parse_id(body.course)
    if course_id is None:
        raise BadRequestError("Invalid course")
    # 형식이 잘못된 학생 ID는 조용히 제외
    student_ids = valid_ids(body.students)
    if not student_ids:
        raise BadRequestError("No valid students")
    return course_id, student_ids


# ✅ [READ] 과목별 수강생 (활성 등록만)
@router.get("")
def read_enrollments(
    course: Optional[str] = Query(None, description="과목 ID"),
    user: dict = Depends(authorize(RequirePermission("Courses", "view"))),
    db: Session = Depends(get_db),
):
    query = db.query(EnrollmentModel).filter(EnrollmentModel.active.is_(True))
    course_id = parse_id(course)
    if course_id is not None:
        query = query.filter(EnrollmentModel.course_id == course_id)
    records = query.order_by(EnrollmentModel.created_at.desc(), EnrollmentModel.id.desc()).all()
    return {
        "success": True,
        "data": [Enrollment.model_validate(r).to_json() for r in records],
    }


# ✅ [CREATE] 한 과목에 여러 학생 등록 (재등록 시 active=True 로 복구)
@router.post("")
def add_enrollments(
    body: EnrollmentChange,
    user: dict = Depends(authorize(RequirePermission("Courses", "edit"))),
    db: Session = Depends(get_db),
):
    course_id, student_ids = _validate_change(body)
    enrolled_at = utcnow()
    ops = [
        UpsertOp(
            key={"course_id": course_id, "student_id": student_id},
            values={"active": True, "enrolled_at": enrolled_at},
        )
        for student_id in student_ids
    ]
    result = bulk_upsert(db, EnrollmentModel, ops)
    logger.info(f"enrollments upserted for course={course_id}: {len(ops)} ops, {len(result.write_errors)} errors")
    return {"success": True, "result": result.to_dict()}


# ✅ [DELETE] 수강 해제 (hard=True 면 행 삭제, 아니면 active=False)
@router.delete("")
def remove_enrollments(
    body: EnrollmentChange,
    user: dict = Depends(authorize(RequirePermission("Courses", "delete"))),
    db: Session = Depends(get_db),
):
    course_id, student_ids = _validate_change(body)
    criteria = (
        EnrollmentModel.course_id == course_id,
        EnrollmentModel.student_id.in_(student_ids),
    )
    if body.hard:
        result = db.execute(delete(EnrollmentModel).where(*criteria))
    else:
        result = db.execute(update(EnrollmentModel).where(*criteria).values(active=False))
    db.commit()
    affected = result.rowcount
    return {
        "success": True,
        "data": {"course": course_id, "students": student_ids, "hard": body.hard, "affected": affected},
    }
