from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from config.settings import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # 알 수 없는 해시 형식 → 불일치로 처리
        return False


def create_session_token(session_user: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """세션 사용자 정보를 담은 서명 토큰 (기본 8시간)"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=settings.SESSION_MAX_AGE_HOURS))
    claims = {"sub": str(session_user["id"]), "user": session_user, "exp": expire}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """유효하면 세션 사용자 dict, 만료/위조/형식 오류면 None"""
    if not token:
        return None
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    user = claims.get("user")
    return user if isinstance(user, dict) else None
