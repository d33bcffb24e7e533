def test_create_teacher_and_conflict(client, admin_headers):
    body = {"name": "Ada Lovelace", "email": "ada@school.local", "subjectSpecialty": "Mathematics"}

    created = client.post("/api/teachers", json=body, headers=admin_headers)
    duplicate = client.post("/api/teachers", json=body, headers=admin_headers)

    assert created.status_code == 201
    assert created.json()["data"]["hireDate"]
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["message"] == "A teacher with this email already exists."


def test_teacher_requires_subject_specialty(client, admin_headers):
    response = client.post(
        "/api/teachers",
        json={"name": "No Subject", "email": "ns@school.local", "subjectSpecialty": ""},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_course_credits_are_coerced(client, admin_headers, create_course):
    assert create_course("Default")["credits"] == 3
    assert create_course("Numeric", credits="4")["credits"] == 4
    assert create_course("Garbage", credits="abc")["credits"] == 3


def test_course_list_embeds_assigned_teacher(client, admin_headers, create_teacher, create_course):
    teacher = create_teacher("grace@school.local", name="Grace Hopper")
    create_course("Compilers", assignedTeacher=str(teacher["id"]))
    create_course("Unassigned")

    listed = client.get("/api/courses", headers=admin_headers).json()["data"]

    assert [c["name"] for c in listed] == ["Unassigned", "Compilers"]
    assert listed[0]["assignedTeacher"] is None
    assert listed[1]["assignedTeacher"]["name"] == "Grace Hopper"


def test_course_with_unknown_teacher_is_rejected(client, admin_headers):
    for teacher in ("not-an-id", 999):
        response = client.post(
            "/api/courses", json={"name": "Orphan", "assignedTeacher": teacher}, headers=admin_headers
        )
        assert response.status_code == 400
