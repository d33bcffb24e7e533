import logging
from typing import Any, Dict

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from database.db import utcnow
from models.users import User as UserModel
from utils.exceptions import AuthenticationError
from utils.security import verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def to_session_user(user: UserModel) -> Dict[str, Any]:
    """토큰에 담기는 세션 사용자 정보"""
    return {
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "isActive": bool(user.is_active),
        "permissions": [
            {
                "module": p.module,
                "canView": bool(p.can_view),
                "canEdit": bool(p.can_edit),
                "canDelete": bool(p.can_delete),
            }
            for p in user.permissions
        ],
    }


def authenticate(db: Session, identifier: str, password: str) -> UserModel:
    """
    아이디 또는 이메일 + 비밀번호 확인
    - 계정 없음 / 비활성 / 비밀번호 불일치 모두 같은 에러 (어느 쪽이 틀렸는지 노출하지 않음)
    """
    identifier = (identifier or "").strip()
    if not identifier or not password:
        raise AuthenticationError(INVALID_CREDENTIALS)

    user = (
        db.query(UserModel)
        .filter(or_(func.lower(UserModel.email) == identifier.lower(), UserModel.username == identifier))
        .first()
    )
    if user is None or not user.is_active:
        logger.info(f"login rejected for {identifier!r}: unknown or inactive account")
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.info(f"login rejected for {identifier!r}: password mismatch")
        raise AuthenticationError(INVALID_CREDENTIALS)

    user.last_login = utcnow()
    db.commit()
    return user


def landing_path(role: str) -> str:
    """로그인 후 역할별 첫 화면"""
    return "/admin/dashboard" if role == "admin" else "/"
