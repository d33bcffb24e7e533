import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from dependencies.database import get_db
from dependencies.security import authorize
from models.attendance import ATTENDANCE_STATUSES, Attendance as AttendanceModel
from schemas.attendance import Attendance, AttendanceDelete, AttendanceMark, AttendanceUpdate
from schemas.common import make_meta
from services.bulk_write import InvalidOperation, UpsertOp, bulk_upsert
from utils.dates import parse_day
from utils.exceptions import BadRequestError, NotFoundError
from utils.ids import parse_id
from utils.rbac import RequirePermission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attendance", tags=["attendance"])

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def _check_status(op: UpsertOp):
    if op.values["status"] not in ATTENDANCE_STATUSES:
        raise InvalidOperation(f"Invalid status: {op.values['status']!r}")


# ==========================================================
# [1단계] 조회 (필터 + 페이지네이션)
# ==========================================================

# ✅ [READ] 출결 기록 조회
# - course / student: ID 필터 (형식이 잘못되면 무시)
# - date: 하루 (UTC) / from~to: 기간 (date 가 있으면 기간은 무시)
@router.get("")
def read_attendance_list(
    course: Optional[str] = Query(None),
    student: Optional[str] = Query(None),
    date: Optional[str] = Query(None, description="조회할 날짜 (예: 2025-01-10)"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    user: dict = Depends(authorize(RequirePermission("Attendance", "view"))),
    db: Session = Depends(get_db),
):
    criteria = []
    course_id = parse_id(course)
    if course_id is not None:
        criteria.append(AttendanceModel.course_id == course_id)
    student_id = parse_id(student)
    if student_id is not None:
        criteria.append(AttendanceModel.student_id == student_id)

    if date:
        day = parse_day(date)
        if day is not None:
            criteria.append(AttendanceModel.date == day)
    else:
        start, end = parse_day(date_from), parse_day(date_to)
        if start is not None:
            criteria.append(AttendanceModel.date >= start)
        if end is not None:
            criteria.append(AttendanceModel.date <= end)

    page_no = max(1, _to_int(page, 1))
    size = min(MAX_PAGE_SIZE, max(1, _to_int(page_size, DEFAULT_PAGE_SIZE)))

    total = db.scalar(select(func.count(AttendanceModel.id)).where(*criteria)) or 0
    records = (
        db.query(AttendanceModel)
        .filter(*criteria)
        .order_by(AttendanceModel.date.desc(), AttendanceModel.id.desc())
        .offset((page_no - 1) * size)
        .limit(size)
        .all()
    )
    return {
        "success": True,
        "data": [Attendance.model_validate(r).to_json() for r in records],
        "total": total,
        "page": page_no,
        "pageSize": size,
        "meta": make_meta(total, page_no, size).model_dump(),
    }


def _to_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value not in (None, "") else default
    except ValueError:
        return default


# ==========================================================
# [2단계] 일괄 입력 / 단건 수정 / 삭제
# ==========================================================

# ✅ [CREATE] 과목+날짜 기준 일괄 출결 입력 (같은 학생/과목/날짜는 덮어쓰기)
@router.post("")
def mark_attendance(
    body: AttendanceMark,
    user: dict = Depends(authorize(RequirePermission("Attendance", "edit"))),
    db: Session = Depends(get_db),
):
    course_id = parse_id(body.course)
    if course_id is None:
        raise BadRequestError("Invalid course")
    day = parse_day(body.date)
    if day is None:
        raise BadRequestError("Invalid date")

    ops = []
    for entry in body.entries:
        student_id = parse_id(entry.student)
        if student_id is None or not isinstance(entry.status, str) or not entry.status:
            continue
        ops.append(
            UpsertOp(
                key={"student_id": student_id, "course_id": course_id, "date": day},
                values={"status": entry.status, "remarks": entry.remarks or None},
            )
        )
    if not ops:
        raise BadRequestError("No valid entries")

    result = bulk_upsert(db, AttendanceModel, ops, validate=_check_status)
    logger.info(f"attendance marked for course={course_id} date={day}: {len(ops)} ops, {len(result.write_errors)} errors")
    return {"success": True, "result": result.to_dict()}


# ✅ [UPDATE] 단건 상태/비고 수정
@router.patch("")
def update_attendance(
    body: AttendanceUpdate,
    user: dict = Depends(authorize(RequirePermission("Attendance", "edit"))),
    db: Session = Depends(get_db),
):
    attendance_id = parse_id(body.id)
    if attendance_id is None:
        raise BadRequestError("Invalid id")
    if body.status and body.status not in ATTENDANCE_STATUSES:
        raise BadRequestError(f"Invalid status: {body.status!r}")

    attendance = db.get(AttendanceModel, attendance_id)
    if attendance is None:
        raise NotFoundError("Attendance record not found")

    if body.status:
        attendance.status = body.status
    if "remarks" in body.model_fields_set:
        attendance.remarks = body.remarks or None
    db.commit()
    db.refresh(attendance)
    return {
        "success": True,
        "data": Attendance.model_validate(attendance).to_json(),
        "message": "Attendance record updated successfully",
    }


# ✅ [DELETE] id 단건 삭제 또는 과목+날짜 전체 삭제
@router.delete("")
def delete_attendance(
    body: Optional[AttendanceDelete] = None,
    user: dict = Depends(authorize(RequirePermission("Attendance", "delete"))),
    db: Session = Depends(get_db),
):
    body = body or AttendanceDelete()

    if body.id not in (None, ""):
        attendance_id = parse_id(body.id)
        if attendance_id is None:
            raise BadRequestError("Invalid id")
        attendance = db.get(AttendanceModel, attendance_id)
        if attendance is None:
            raise NotFoundError("Attendance record not found")
        db.delete(attendance)
        db.commit()
        return {"success": True, "data": {"attendance_id": attendance_id, "deleted": 1}}

    course_id = parse_id(body.course)
    day = parse_day(body.date)
    if course_id is not None and day is not None:
        result = db.execute(
            delete(AttendanceModel).where(AttendanceModel.course_id == course_id, AttendanceModel.date == day)
        )
        db.commit()
        return {"success": True, "data": {"course": course_id, "date": day.isoformat(), "deleted": result.rowcount}}

    raise BadRequestError("Specify id or (course & date)")
