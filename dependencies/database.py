from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from database.db import Database
from utils.exceptions import ConfigurationError


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise ConfigurationError("Database not configured (DATABASE_URL missing)")
    return database


# ==========================================================
# [공통] DB 세션 관리
# - 모든 요청에서 세션을 생성하고 종료
# ==========================================================
def get_db(request: Request) -> Iterator[Session]:
    database = get_database(request)
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
