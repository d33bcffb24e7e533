from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings
from database.db import Database, create_database

logging.basicConfig(level=settings.LOG_LEVEL)
# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)

logger = logging.getLogger(__name__)


# ✅ 미들웨어 임포트
from middlewares.auth_gate import AuthGateMiddleware
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import (
    attendance, auth, courses, dashboard, enrollments,
    modules, students, teachers, users,
)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    앱 생성
    - database 를 넘기면 그대로 사용 (테스트 등)
    - 없으면 startup 시 settings.DATABASE_URL 로 생성, shutdown 시 정리
    """
    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
    )
    app.state.database = database

    # ✅ CORS 설정 (프론트엔드 연동 대비)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ✅ 페이지 접근 게이트 (로그인/관리자 경로 리다이렉트)
    app.add_middleware(AuthGateMiddleware)

    # ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
    app.add_middleware(TimingMiddleware)

    # ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
    add_error_handlers(app)

    # ✅ /api 프리픽스 라우터 등록
    app.include_router(auth.router,        prefix="/api")
    app.include_router(students.router,    prefix="/api")
    app.include_router(teachers.router,    prefix="/api")
    app.include_router(courses.router,     prefix="/api")
    app.include_router(enrollments.router, prefix="/api")
    app.include_router(attendance.router,  prefix="/api")
    app.include_router(dashboard.router,   prefix="/api")
    app.include_router(users.router,       prefix="/api")
    app.include_router(modules.router,     prefix="/api")

    # ✅ 헬스체크 엔드포인트
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "message": "API is running",
            "database": "configured" if app.state.database is not None else "not configured",
        }

    # ✅ 루트 엔드포인트 (로그인 필요)
    @app.get("/")
    def root():
        return {"message": "School Management API"}

    @app.on_event("startup")
    def _connect_database():
        if app.state.database is None:
            app.state.database = create_database()

    @app.on_event("shutdown")
    def _close_database():
        if app.state.database is not None:
            app.state.database.dispose()
            app.state.database = None

    return app


app = create_app()


# ✅ 로컬 실행: python main.py (배포는 uvicorn main:app)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.APP_HOST, port=settings.APP_PORT, reload=settings.ENV == "dev")
