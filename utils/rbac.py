"""
utils/rbac.py

역할/모듈 권한 판정을 한 곳에 모은 모듈.
- 모든 API 핸들러는 dependencies.security.authorize(capability) 로 여기의 Capability 를 사용
- admin 은 모든 모듈 권한을 암묵적으로 가짐
"""

from typing import Any, Dict, Iterable, Literal, Optional

Action = Literal["view", "edit", "delete"]
SessionUser = Dict[str, Any]

_ACTION_FLAGS = {"view": "canView", "edit": "canEdit", "delete": "canDelete"}


def is_admin(user: Optional[SessionUser]) -> bool:
    return bool(user) and user.get("role") == "admin" and user.get("isActive") is True


def has_permission(permissions: Optional[Iterable[Dict[str, Any]]], module: str, action: Action = "view") -> bool:
    flag = _ACTION_FLAGS.get(action)
    if flag is None:
        return False
    for p in permissions or []:
        if p.get("module") == module:
            return bool(p.get(flag))
    return False


def user_can(user: Optional[SessionUser], module: str, action: Action = "view") -> bool:
    """세션 사용자 기준 권한 판정 (admin 은 항상 True)"""
    if is_admin(user):
        return True
    if not user or user.get("isActive") is not True:
        return False
    return has_permission(user.get("permissions"), module, action)


class Capability:
    """'이 요청을 하려면 무엇이 필요한가'를 표현하는 인터페이스"""

    def allows(self, user: SessionUser) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        return self.__class__.__name__


class Authenticated(Capability):
    """활성 세션만 있으면 허용"""

    def allows(self, user: SessionUser) -> bool:
        return user.get("isActive") is True


class RequireRole(Capability):
    def __init__(self, *roles: str):
        self.roles = set(roles)

    def allows(self, user: SessionUser) -> bool:
        return user.get("isActive") is True and user.get("role") in self.roles

    def describe(self) -> str:
        return f"role in {sorted(self.roles)}"


class RequirePermission(Capability):
    def __init__(self, module: str, action: Action = "view"):
        self.module = module
        self.action = action

    def allows(self, user: SessionUser) -> bool:
        return user_can(user, self.module, self.action)

    def describe(self) -> str:
        return f"{self.action} on {self.module}"


ADMIN_ONLY = RequireRole("admin")
