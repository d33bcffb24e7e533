import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dependencies.database import get_db
from dependencies.security import authorize
from models.users import ROLES, Permission as PermissionModel, User as UserModel
from schemas.users import PermissionAssign, PermissionIn, User, UserCreate, UserUpdate
from utils.exceptions import BadRequestError, ConflictError, NotFoundError
from utils.ids import parse_id
from utils.rbac import ADMIN_ONLY
from utils.security import hash_password

logger = logging.getLogger(__name__)

# ✅ 계정/권한 관리는 전부 admin 전용
router = APIRouter(prefix="/users", tags=["users"])
require_admin = authorize(ADMIN_ONLY)


def _permission_rows(permissions: List[PermissionIn]) -> List[PermissionModel]:
    # 같은 모듈이 여러 번 오면 마지막 값 사용
    by_module = {p.module: p for p in permissions}
    return [
        PermissionModel(module=p.module, can_view=p.can_view, can_edit=p.can_edit, can_delete=p.can_delete)
        for p in by_module.values()
    ]


def _replace_permissions(db: Session, user: UserModel, permissions: List[PermissionIn]):
    # 기존 행 삭제를 먼저 flush 해야 (user_id, module) 유니크 충돌이 없음
    user.permissions.clear()
    db.flush()
    user.permissions.extend(_permission_rows(permissions))


def _get_user(db: Session, user_id) -> UserModel:
    parsed = parse_id(user_id)
    user = db.get(UserModel, parsed) if parsed is not None else None
    if user is None:
        raise NotFoundError("Not found")
    return user


def _commit_unique(db: Session):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("A user with this username or email already exists.")


# ✅ [READ] 전체 계정 조회 (비밀번호 제외)
@router.get("")
def read_users(admin: dict = Depends(require_admin), db: Session = Depends(get_db)):
    users = db.query(UserModel).order_by(UserModel.created_at.desc(), UserModel.id.desc()).all()
    return {"success": True, "data": [User.model_validate(u).to_json() for u in users]}


# ✅ [CREATE] 계정 생성
@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, admin: dict = Depends(require_admin), db: Session = Depends(get_db)):
    username = (body.username or "").strip()
    email = (body.email or "").strip().lower()
    if not username or not email or not body.password or not body.role:
        raise BadRequestError("Missing fields")
    if body.role not in ROLES:
        raise BadRequestError(f"Invalid role: {body.role!r}")

    user = UserModel(
        username=username,
        email=email,
        password_hash=hash_password(body.password),
        role=body.role,
        is_active=body.is_active,
        permissions=_permission_rows(body.permissions),
    )
    db.add(user)
    _commit_unique(db)
    db.refresh(user)
    logger.info(f"user created: id={user.id} role={user.role} by admin={admin.get('id')}")
    return {"success": True, "data": User.model_validate(user).to_json()}


# ✅ [UPDATE] 계정 수정 (보낸 필드만 반영)
@router.put("/{user_id}")
def update_user(user_id: str, body: UserUpdate, admin: dict = Depends(require_admin), db: Session = Depends(get_db)):
    user = _get_user(db, user_id)

    if body.username is not None:
        if not body.username.strip():
            raise BadRequestError("Missing fields")
        user.username = body.username.strip()
    if body.email is not None:
        if not body.email.strip():
            raise BadRequestError("Missing fields")
        user.email = body.email.strip().lower()
    if body.role is not None:
        if body.role not in ROLES:
            raise BadRequestError(f"Invalid role: {body.role!r}")
        user.role = body.role
    if body.is_active is not None:
        user.is_active = body.is_active
    if body.permissions is not None:
        _replace_permissions(db, user, body.permissions)
    if body.password:
        user.password_hash = hash_password(body.password)

    _commit_unique(db)
    db.refresh(user)
    return {"success": True, "data": User.model_validate(user).to_json()}


# ✅ [DELETE] 계정 삭제
@router.delete("/{user_id}")
def delete_user(user_id: str, admin: dict = Depends(require_admin), db: Session = Depends(get_db)):
    user = _get_user(db, user_id)
    db.delete(user)
    db.commit()
    return {"success": True, "data": {"user_id": user.id}}


# ✅ [UPDATE] 모듈별 권한 일괄 지정 { userId, permissions[] }
@router.post("/permissions")
def assign_permissions(body: PermissionAssign, admin: dict = Depends(require_admin), db: Session = Depends(get_db)):
    if body.user_id in (None, "") or body.permissions is None:
        raise BadRequestError("Invalid payload")
    user = _get_user(db, body.user_id)
    _replace_permissions(db, user, body.permissions)
    db.commit()
    db.refresh(user)
    return {"success": True, "data": User.model_validate(user).to_json()}
