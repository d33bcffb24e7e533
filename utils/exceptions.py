"""
utils/exceptions.py

- 라우터/서비스에서 raise 하는 애플리케이션 에러 모음
- middlewares/error_handler.py 에서 ErrorResponse 형식({"error": {"code", "message"}})으로 변환
"""

from typing import Dict, Optional


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.headers = headers


class ConfigurationError(AppError):
    """저장소 미구성/연결 불가"""
    status_code = 500
    code = "DB_NOT_CONFIGURED"


class BadRequestError(AppError):
    status_code = 400
    code = "BAD_REQUEST"


class ConflictError(AppError):
    """유니크 키 충돌 (이메일, 복합 인덱스 등)"""
    status_code = 409
    code = "CONFLICT"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class AuthenticationError(AppError):
    status_code = 401
    code = "INVALID_CREDENTIALS"


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"
