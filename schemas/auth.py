from typing import List, Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    identifier: str        # 아이디 또는 이메일
    password: str


class SessionPermission(BaseModel):
    module: str
    canView: bool
    canEdit: bool
    canDelete: bool


class SessionUser(BaseModel):
    id: str
    username: str
    email: str
    role: str
    isActive: bool
    permissions: List[SessionPermission] = []


class LoginResponse(BaseModel):
    token: str
    user: SessionUser
    redirect: Optional[str] = None
