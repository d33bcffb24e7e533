import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dependencies.database import get_db
from dependencies.security import authorize
from models.courses import Course as CourseModel
from models.teachers import Teacher as TeacherModel
from schemas.courses import Course, CourseCreate
from utils.exceptions import BadRequestError
from utils.ids import parse_id
from utils.rbac import RequirePermission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


# ✅ [READ] 전체 과목 조회 (담당 교사 포함, 최신 등록순)
@router.get("")
def read_courses(
    user: dict = Depends(authorize(RequirePermission("Courses", "view"))),
    db: Session = Depends(get_db),
):
    records = db.query(CourseModel).order_by(CourseModel.created_at.desc(), CourseModel.id.desc()).all()
    return {
        "success": True,
        "data": [Course.model_validate(r).to_json() for r in records],
    }


# ✅ [CREATE] 과목 추가
@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(
    course: CourseCreate,
    user: dict = Depends(authorize(RequirePermission("Courses", "edit"))),
    db: Session = Depends(get_db),
):
    teacher_id = None
    if course.assigned_teacher not in (None, ""):
        teacher_id = parse_id(course.assigned_teacher)
        if teacher_id is None or db.get(TeacherModel, teacher_id) is None:
            raise BadRequestError("Invalid assignedTeacher")

    db_course = CourseModel(
        name=course.name,
        description=course.description,
        credits=course.credits,
        assigned_teacher_id=teacher_id,
    )
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    logger.info(f"course created: id={db_course.id}")
    return {
        "success": True,
        "data": Course.model_validate(db_course).to_json(),
        "message": "Course created successfully",
    }
