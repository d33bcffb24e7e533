from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from config.settings import settings
from dependencies.database import get_db
from dependencies.security import get_session_user
from schemas.auth import LoginRequest, LoginResponse
from services.auth_service import authenticate, landing_path, to_session_user
from utils.security import create_session_token

router = APIRouter(prefix="/auth", tags=["인증"])


# ✅ [LOGIN] 로그인 API → 서명된 세션 토큰 (쿠키 + 응답 본문)
@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = authenticate(db, request.identifier, request.password)
    session_user = to_session_user(user)
    token = create_session_token(session_user)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_HOURS * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return {"token": token, "user": session_user, "redirect": landing_path(user.role)}


# ✅ [LOGOUT] 세션 쿠키 삭제
@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"success": True}


# ✅ [SESSION] 현재 세션 사용자 (없으면 null)
@router.get("/session")
def read_session(user: Optional[dict] = Depends(get_session_user)):
    return {"success": True, "data": user}
