import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import Column, DateTime, create_engine, event             # SQLAlchemy 엔진 생성 도구
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config.settings import settings                       # ✅ 환경변수 설정 파일 불러오기

logger = logging.getLogger(__name__)


# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
class Base(DeclarativeBase):
    pass


class Database:
    """
    프로세스 당 하나의 엔진(커넥션 풀)과 세션 팩토리를 보관하는 저장소 클라이언트.

    - 앱 시작 시 생성 → app.state.database 에 보관
    - 앱 종료 시 dispose() 로 풀 정리
    - 동시 요청은 같은 풀을 공유하며, 애플리케이션 레벨 락은 사용하지 않음
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine: Engine = create_engine(url, **_engine_options(url), **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            _enable_sqlite_savepoints(self.engine)
        # ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def create_all(self) -> None:
        # 모델 모듈을 import 해야 Base.metadata 에 테이블이 등록됨
        from models import attendance, courses, enrollments, modules, students, teachers, users  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {"connect_timeout": settings.DB_CONNECT_TIMEOUT},
    }


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite 드라이버는 BEGIN을 직접 내보내지 않으면 SAVEPOINT가 동작하지 않음
    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_database(url: Optional[str] = None) -> Optional[Database]:
    """설정된 URL이 없으면 None (저장소 미구성 상태)"""
    url = url or settings.DATABASE_URL
    if not url:
        logger.warning("[DB] DATABASE_URL is not set. Database features are disabled until configured.")
        return None
    database = Database(url)
    if settings.DB_AUTO_CREATE:
        try:
            database.create_all()
        except SQLAlchemyError as exc:
            # 연결 실패해도 서버는 시작 → 요청 시 DB_UNAVAILABLE 로 응답
            logger.error(f"[DB] could not create tables: {exc}")
    return database


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """created_at / updated_at 공통 컬럼"""

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
