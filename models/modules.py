from sqlalchemy import Boolean, Column, Integer, String
from database.db import Base, TimestampMixin


class Module(TimestampMixin, Base):
    __tablename__ = "modules"  # 화면(기능) 모듈 목록

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)    # 모듈명 (권한 키)
    path = Column(String(200), nullable=False)                 # 라우트 경로
    icon = Column(String(100))                                 # 아이콘 이름
    description = Column(String(500))
    is_active = Column(Boolean, nullable=False, default=True)
