import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.db import utcnow
from dependencies.database import get_db
from dependencies.security import authorize
from models.teachers import Teacher as TeacherModel
from schemas.teachers import Teacher, TeacherCreate
from utils.exceptions import ConflictError
from utils.rbac import RequirePermission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teachers", tags=["teachers"])


# ✅ [READ] 전체 교사 조회 (최신 등록순)
@router.get("")
def read_teachers(
    user: dict = Depends(authorize(RequirePermission("Teachers", "view"))),
    db: Session = Depends(get_db),
):
    records = db.query(TeacherModel).order_by(TeacherModel.created_at.desc(), TeacherModel.id.desc()).all()
    return {
        "success": True,
        "data": [Teacher.model_validate(r).to_json() for r in records],
    }


# ✅ [CREATE] 교사 정보 추가
@router.post("", status_code=status.HTTP_201_CREATED)
def create_teacher(
    teacher: TeacherCreate,
    user: dict = Depends(authorize(RequirePermission("Teachers", "edit"))),
    db: Session = Depends(get_db),
):
    db_teacher = TeacherModel(
        name=teacher.name,
        email=teacher.email,
        subject_specialty=teacher.subject_specialty,
        hire_date=teacher.hire_date or utcnow(),
    )
    db.add(db_teacher)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A teacher with this email already exists.")
    db.refresh(db_teacher)
    logger.info(f"teacher created: id={db_teacher.id}")
    return {
        "success": True,
        "data": Teacher.model_validate(db_teacher).to_json(),
        "message": "Teacher created successfully",
    }
