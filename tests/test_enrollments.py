from models.enrollments import Enrollment as EnrollmentModel


def _rows(database, course_id):
    with database.session() as db:
        return [
            (row.student_id, row.active)
            for row in db.query(EnrollmentModel).filter(EnrollmentModel.course_id == course_id)
        ]


def test_invalid_student_ids_are_dropped(client, admin_headers, create_student, create_course):
    student = create_student("a@school.local")
    course = create_course()

    response = client.post(
        "/api/enrollments",
        json={"course": str(course["id"]), "students": [str(student["id"]), "not-an-id"]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["upsertedCount"] == 1
    assert result["writeErrors"] == []

    listed = client.get(f"/api/enrollments?course={course['id']}", headers=admin_headers).json()["data"]
    assert len(listed) == 1
    assert listed[0]["student"]["id"] == student["id"]
    assert listed[0]["course"]["id"] == course["id"]
    assert listed[0]["active"] is True


def test_no_valid_students_is_bad_request(client, admin_headers, create_course):
    course = create_course()

    response = client.post(
        "/api/enrollments", json={"course": course["id"], "students": ["nope", ""]}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "No valid students"


def test_invalid_course_is_bad_request(client, admin_headers):
    response = client.post(
        "/api/enrollments", json={"course": "abc", "students": [1]}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid course"


def test_soft_delete_deactivates_and_reenroll_reactivates(client, admin_headers, database, create_student, create_course):
    student = create_student("b@school.local")
    course = create_course()
    body = {"course": course["id"], "students": [student["id"]]}
    client.post("/api/enrollments", json=body, headers=admin_headers)

    removed = client.request("DELETE", "/api/enrollments", json={**body, "hard": False}, headers=admin_headers)

    assert removed.status_code == 200
    assert removed.json()["data"]["affected"] == 1
    assert client.get(f"/api/enrollments?course={course['id']}", headers=admin_headers).json()["data"] == []
    assert _rows(database, course["id"]) == [(student["id"], False)]

    again = client.post("/api/enrollments", json=body, headers=admin_headers).json()["result"]

    assert again["matchedCount"] == 1
    assert again["upsertedCount"] == 0
    assert _rows(database, course["id"]) == [(student["id"], True)]


def test_hard_delete_removes_rows(client, admin_headers, database, create_student, create_course):
    first = create_student("c@school.local")
    second = create_student("d@school.local")
    course = create_course()
    client.post(
        "/api/enrollments",
        json={"course": course["id"], "students": [first["id"], second["id"]]},
        headers=admin_headers,
    )

    client.request(
        "DELETE",
        "/api/enrollments",
        json={"course": course["id"], "students": [first["id"], "bogus"], "hard": True},
        headers=admin_headers,
    )

    assert _rows(database, course["id"]) == [(second["id"], True)]


def test_enrollments_use_courses_permission(client, make_user, headers_for, create_course):
    course = create_course()
    viewer = make_user("viewer", permissions=[{"module": "Courses", "canView": True}])

    listed = client.get("/api/enrollments", headers=headers_for(viewer))
    removed = client.request(
        "DELETE", "/api/enrollments", json={"course": course["id"], "students": [1]}, headers=headers_for(viewer)
    )

    assert listed.status_code == 200
    assert removed.status_code == 403
