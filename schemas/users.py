from datetime import datetime
from typing import Any, List, Optional

from schemas.common import CamelModel, ORMModel, RequiredStr


class PermissionIn(CamelModel):
    module: RequiredStr
    can_view: bool = True
    can_edit: bool = False
    can_delete: bool = False


class Permission(ORMModel):
    module: str
    can_view: bool
    can_edit: bool
    can_delete: bool


class UserCreate(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    is_active: bool = True
    permissions: List[PermissionIn] = []


class UserUpdate(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None
    permissions: Optional[List[PermissionIn]] = None


class PermissionAssign(CamelModel):
    user_id: Any = None
    permissions: Optional[List[PermissionIn]] = None


# ✅ 비밀번호 해시는 절대 응답에 포함하지 않음
class User(ORMModel):
    id: int
    username: str
    email: str
    role: str
    is_active: bool
    last_login: Optional[datetime] = None
    permissions: List[Permission] = []
    created_at: datetime
    updated_at: datetime
