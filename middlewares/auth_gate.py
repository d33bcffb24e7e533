"""
페이지 접근 게이트

- 정적 자원, API(/api/* 는 핸들러별 authorize 로 검사), 헬스체크, 문서 경로는 통과
- /login: 이미 로그인한 사용자는 역할별 첫 화면으로 이동
- /admin*: 비로그인 → 로그인 화면, admin 이 아니면 홈으로
- 나머지 모든 페이지: 로그인 필요
"""

from urllib.parse import urlencode

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from config.settings import settings
from services.auth_service import landing_path
from utils.security import decode_session_token

PUBLIC_PREFIXES = ("/api", "/static", "/favicon", "/health", "/docs", "/redoc", "/openapi.json")
ADMIN_ONLY_PREFIXES = ("/admin",)
AUTH_PAGES = ("/login",)


def _login_redirect(pathname: str) -> RedirectResponse:
    return RedirectResponse(f"/login?{urlencode({'callbackUrl': pathname})}")


class AuthGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        pathname = request.url.path
        if pathname.startswith(PUBLIC_PREFIXES):
            return await call_next(request)

        user = decode_session_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
        is_authenticated = bool(user) and user.get("isActive") is True

        if pathname in AUTH_PAGES:
            if is_authenticated:
                return RedirectResponse(landing_path(user.get("role")))
            return await call_next(request)

        if not is_authenticated:
            return _login_redirect(pathname)

        if pathname.startswith(ADMIN_ONLY_PREFIXES) and user.get("role") != "admin":
            return RedirectResponse("/")

        return await call_next(request)
