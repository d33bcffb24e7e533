from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base, TimestampMixin

ROLES = ("admin", "teacher", "student")


class User(TimestampMixin, Base):
    __tablename__ = "users"  # 로그인 계정

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)        # 소문자로 저장
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)                       # admin / teacher / student
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True))

    permissions = relationship(
        "Permission",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Permission.id",
    )


class Permission(Base):
    __tablename__ = "user_permissions"  # 모듈별 조회/수정/삭제 권한
    __table_args__ = (
        UniqueConstraint("user_id", "module", name="uq_permission_user_module"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    module = Column(String(100), nullable=False)
    can_view = Column(Boolean, nullable=False, default=True)
    can_edit = Column(Boolean, nullable=False, default=False)
    can_delete = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="permissions")
