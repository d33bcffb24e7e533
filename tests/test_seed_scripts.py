import pytest
from fastapi.testclient import TestClient

from database.db import Database
from main import create_app
from models.attendance import Attendance
from models.enrollments import Enrollment
from models.users import User
from scripts import seed_auth, seed_school


@pytest.fixture
def seed_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'seed.db'}"

    def _create_database():
        database = Database(url)
        database.create_all()
        return database

    monkeypatch.setattr(seed_auth, "create_database", _create_database)
    monkeypatch.setattr(seed_school, "create_database", _create_database)
    return url


def test_seed_auth_is_rerunnable_and_admin_can_log_in(seed_url):
    seed_auth.seed_auth()
    seed_auth.seed_auth()

    database = Database(seed_url)
    with database.session() as db:
        admins = db.query(User).all()
        assert [u.username for u in admins] == [seed_auth.ADMIN_USERNAME]
        assert len(admins[0].permissions) == len(seed_auth.MODULES)

    client = TestClient(create_app(database=database))
    response = client.post(
        "/api/auth/login", json={"identifier": seed_auth.ADMIN_EMAIL, "password": seed_auth.ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    assert client.get("/api/modules").json()["data"][0]["name"] == "Dashboard"
    database.dispose()


def test_seed_school_does_not_duplicate_rows(seed_url):
    seed_school.seed_school()

    database = Database(seed_url)
    with database.session() as db:
        enrollments = db.query(Enrollment).count()
        attendance = db.query(Attendance).count()
    database.dispose()

    assert enrollments == len(seed_school.COURSES) * 30
    assert attendance == enrollments * seed_school.ATTENDANCE_DAYS
