from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Header, Request

from config.settings import settings
from utils.exceptions import ForbiddenError
from utils.rbac import Capability
from utils.security import decode_session_token

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


def read_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """"Bearer <token>" 헤더에서 토큰만 추출"""
    if not authorization:
        return None
    try:
        scheme, value = authorization.split(" ", 1)
    except ValueError:
        return None
    if scheme.lower() == "bearer":
        return value.strip()
    return None


def get_session_user(request: Request, authorization: AuthHeader = None) -> Optional[Dict[str, Any]]:
    """
    쿠키 우선, 쿠키가 없거나 만료/위조로 해석되지 않으면 Bearer 헤더
    """
    user = decode_session_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if user is not None:
        return user
    return decode_session_token(read_bearer_token(authorization))


def authorize(capability: Capability):
    """
    모든 API 핸들러가 공통으로 쓰는 권한 검사 의존성
    - 세션 없음/비활성 계정 → 403 Not authenticated
    - capability 불충족 → 403 Forbidden
    """

    def _dependency(user: Optional[Dict[str, Any]] = Depends(get_session_user)) -> Dict[str, Any]:
        if not user or user.get("isActive") is not True:
            raise ForbiddenError("Not authenticated", code="NOT_AUTHENTICATED")
        if not capability.allows(user):
            raise ForbiddenError("Forbidden")
        return user

    return _dependency
