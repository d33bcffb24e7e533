from fastapi.testclient import TestClient

from main import create_app
from utils.dates import last_n_days, utc_today


def test_dashboard_shape_and_counts(client, admin_headers, create_student, create_teacher, create_course):
    teacher = create_teacher("t@school.local", name="Grace Hopper")
    busy = create_course("Physics", assignedTeacher=teacher["id"])
    quiet = create_course("Art", assignedTeacher=teacher["id"])
    students = [create_student(f"d{i}@school.local") for i in range(3)]
    client.post("/api/enrollments", json={"course": busy["id"], "students": [s["id"] for s in students]}, headers=admin_headers)
    client.post("/api/enrollments", json={"course": quiet["id"], "students": [students[0]["id"]]}, headers=admin_headers)
    client.post(
        "/api/attendance",
        json={
            "course": busy["id"],
            "date": utc_today().isoformat(),
            "entries": [
                {"student": students[0]["id"], "status": "present"},
                {"student": students[1]["id"], "status": "late"},
            ],
        },
        headers=admin_headers,
    )

    response = client.get("/api/dashboard", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    body = response.json()
    assert body["counts"] == {
        "students": 3,
        "teachers": 1,
        "courses": 2,
        "enrollmentsActive": 4,
        "attendanceRecords": 2,
    }

    series = body["attendanceLast7Days"]
    assert [d["date"] for d in series] == [d.isoformat() for d in last_n_days(7)]
    assert series[-1]["total"] == 2
    assert series[-1]["present"] == 1
    assert series[-1]["late"] == 1
    assert series[-1]["ratePresent"] == 0.5
    assert all(d["total"] == 0 and d["ratePresent"] == 0 for d in series[:-1])

    assert body["topCoursesByEnrollment"][0] == {"courseId": busy["id"], "name": "Physics", "count": 3}
    assert body["teacherCourseCounts"] == [
        {"teacherId": teacher["id"], "name": "Grace Hopper", "email": "t@school.local", "courseCount": 2}
    ]
    assert len(body["recent"]["students"]) == 3
    assert body["recent"]["courses"][0]["name"] == "Art"
    assert len(body["recent"]["attendance"]) == 2


def test_dashboard_empty_store(client, admin_headers):
    body = client.get("/api/dashboard", headers=admin_headers).json()

    assert body["counts"]["students"] == 0
    assert len(body["attendanceLast7Days"]) == 7
    assert body["topCoursesByEnrollment"] == []
    assert body["recent"]["attendance"] == []


def test_dashboard_without_store_is_not_cached(headers_for):
    client = TestClient(create_app(database=None))
    admin = {"id": "1", "username": "root", "role": "admin", "isActive": True, "permissions": []}

    response = client.get("/api/dashboard", headers=headers_for(admin))

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "DB_NOT_CONFIGURED"
    assert response.headers["cache-control"] == "no-store"


def test_dashboard_requires_permission(client, make_user, headers_for):
    student = make_user("pupil", role="student")

    response = client.get("/api/dashboard", headers=headers_for(student))

    assert response.status_code == 403


def test_dashboard_auth_failures_are_not_cached(client, make_user, headers_for):
    anonymous = client.get("/api/dashboard")
    forbidden = client.get("/api/dashboard", headers=headers_for(make_user("pupil2", role="student")))

    for response in (anonymous, forbidden):
        assert response.status_code == 403
        assert response.headers["cache-control"] == "no-store"


def test_no_store_route_covers_validation_errors(database):
    from fastapi import APIRouter

    from routers.dashboard import NoStoreRoute

    router = APIRouter(route_class=NoStoreRoute)

    @router.get("/api/window")
    def read_window(days: int):
        return {"days": days}

    app = create_app(database=database)
    app.include_router(router)
    client = TestClient(app)

    ok = client.get("/api/window?days=7")
    invalid = client.get("/api/window?days=week")

    assert ok.headers["cache-control"] == "no-store"
    assert invalid.status_code == 400
    assert invalid.json()["error"]["code"] == "VALIDATION_ERROR"
    assert invalid.headers["cache-control"] == "no-store"
