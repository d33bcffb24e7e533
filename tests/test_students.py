def test_create_student_defaults_enrollment_date(client, admin_headers):
    response = client.post(
        "/api/students",
        json={"name": "  Jane Doe ", "email": "jane@school.local", "grade": "7", "parentContact": "555-0100"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Jane Doe"
    assert data["parentContact"] == "555-0100"
    assert data["enrollmentDate"]
    assert data["addressSameAsStudent"] is False


def test_create_student_keeps_extended_profile(client, admin_headers):
    response = client.post(
        "/api/students",
        json={
            "name": "Sam Lee",
            "email": "sam@school.local",
            "grade": "9",
            "parentContact": "555-0101",
            "enrollmentDate": "2024-09-01",
            "dob": "2011-04-02",
            "gender": "Male",
            "parent": {"name": "Kim Lee", "mobile": "555-0199"},
            "meta": {"bus": 12},
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["enrollmentDate"].startswith("2024-09-01")
    assert data["dob"] == "2011-04-02"
    assert data["parent"]["name"] == "Kim Lee"
    assert data["meta"] == {"bus": 12}


def test_duplicate_email_is_conflict(client, admin_headers, create_student):
    create_student("dup@school.local")

    response = client.post(
        "/api/students",
        json={"name": "Other", "email": "dup@school.local", "grade": "8", "parentContact": "555"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"
    listed = client.get("/api/students", headers=admin_headers).json()["data"]
    assert [s["email"] for s in listed] == ["dup@school.local"]


def test_blank_required_field_is_bad_request(client, admin_headers):
    response = client.post(
        "/api/students",
        json={"name": "   ", "email": "x@school.local", "grade": "7", "parentContact": "555"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "name" in body["error"]["message"]


def test_list_students_newest_first(client, admin_headers, create_student):
    create_student("first@school.local")
    create_student("second@school.local")

    listed = client.get("/api/students", headers=admin_headers).json()["data"]

    assert [s["email"] for s in listed] == ["second@school.local", "first@school.local"]


def test_students_require_session(client):
    response = client.get("/api/students")

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"


def test_students_view_permission_does_not_grant_edit(client, make_user, headers_for):
    viewer = make_user("viewer", permissions=[{"module": "Students", "canView": True}])
    headers = headers_for(viewer)

    assert client.get("/api/students", headers=headers).status_code == 200
    response = client.post(
        "/api/students",
        json={"name": "A", "email": "a@school.local", "grade": "7", "parentContact": "555"},
        headers=headers,
    )
    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Forbidden"
