from typing import Iterable, Optional

import pytest
from fastapi.testclient import TestClient

from database.db import Database
from main import create_app
from models.users import Permission as PermissionModel, User as UserModel
from services.auth_service import to_session_user
from utils.security import create_session_token, hash_password

FULL_ACCESS = ("Dashboard", "Students", "Teachers", "Courses", "Attendance")


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'school.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_user(database):
    """계정을 만들고 ORM 객체 대신 세션 사용자 dict 를 반환"""

    def _make_user(
        username: str,
        role: str = "teacher",
        password: str = "secret123",
        is_active: bool = True,
        permissions: Iterable[dict] = (),
        email: Optional[str] = None,
    ) -> dict:
        with database.session() as db:
            user = UserModel(
                username=username,
                email=email or f"{username}@school.local",
                password_hash=hash_password(password),
                role=role,
                is_active=is_active,
                permissions=[
                    PermissionModel(
                        module=p["module"],
                        can_view=p.get("canView", True),
                        can_edit=p.get("canEdit", False),
                        can_delete=p.get("canDelete", False),
                    )
                    for p in permissions
                ],
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return to_session_user(user)

    return _make_user


def bearer(session_user: dict) -> dict:
    return {"Authorization": f"Bearer {create_session_token(session_user)}"}


@pytest.fixture
def admin_headers(make_user):
    return bearer(make_user("admin", role="admin"))


@pytest.fixture
def editor_headers(make_user):
    """admin 이 아닌, 모든 모듈에 조회/수정/삭제 권한을 가진 교사"""
    permissions = [
        {"module": m, "canView": True, "canEdit": True, "canDelete": True} for m in FULL_ACCESS
    ]
    return bearer(make_user("editor", role="teacher", permissions=permissions))


@pytest.fixture
def create_student(client, admin_headers):
    def _create_student(email: str, name: str = "Jane Doe", **extra) -> dict:
        body = {"name": name, "email": email, "grade": "7", "parentContact": "+1-555-0100", **extra}
        response = client.post("/api/students", json=body, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create_student


@pytest.fixture
def create_teacher(client, admin_headers):
    def _create_teacher(email: str, name: str = "Ada Lovelace", **extra) -> dict:
        body = {"name": name, "email": email, "subjectSpecialty": "Mathematics", **extra}
        response = client.post("/api/teachers", json=body, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create_teacher


@pytest.fixture
def create_course(client, admin_headers):
    def _create_course(name: str = "Algebra", **extra) -> dict:
        response = client.post("/api/courses", json={"name": name, **extra}, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create_course


@pytest.fixture
def headers_for():
    return bearer
