import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.db import utcnow
from dependencies.database import get_db
from dependencies.security import authorize
from models.students import Student as StudentModel
from schemas.students import Student, StudentCreate
from utils.exceptions import ConflictError
from utils.rbac import RequirePermission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["students"])


# ✅ [READ] 전체 학생 조회 (최신 등록순)
@router.get("")
def read_students(
    user: dict = Depends(authorize(RequirePermission("Students", "view"))),
    db: Session = Depends(get_db),
):
    records = db.query(StudentModel).order_by(StudentModel.created_at.desc(), StudentModel.id.desc()).all()
    return {
        "success": True,
        "data": [Student.model_validate(r).to_json() for r in records],
    }


# ✅ [CREATE] 학생 정보 추가
@router.post("", status_code=status.HTTP_201_CREATED)
def create_student(
    student: StudentCreate,
    user: dict = Depends(authorize(RequirePermission("Students", "edit"))),
    db: Session = Depends(get_db),
):
    payload = student.model_dump()
    payload["enrollment_date"] = payload["enrollment_date"] or utcnow()

    db_student = StudentModel(**payload)
    db.add(db_student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A student with this email already exists.")
    db.refresh(db_student)
    logger.info(f"student created: id={db_student.id}")
    return {
        "success": True,
        "data": Student.model_validate(db_student).to_json(),
        "message": "Student created successfully",
    }
