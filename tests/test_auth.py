from datetime import timedelta

from utils.security import create_session_token, decode_session_token


def _login(client, identifier, password="secret123"):
    return client.post("/api/auth/login", json={"identifier": identifier, "password": password})


def test_login_by_username_and_email(client, make_user):
    make_user("alice", role="teacher", email="Alice@School.local")

    by_name = _login(client, "alice")
    by_email = _login(client, "ALICE@school.local")

    assert by_name.status_code == 200
    assert by_email.status_code == 200
    body = by_name.json()
    assert body["redirect"] == "/"
    assert body["user"]["username"] == "alice"
    assert "passwordHash" not in body["user"]
    assert decode_session_token(body["token"])["role"] == "teacher"
    assert "session_token" in by_name.cookies


def test_admin_lands_on_dashboard(client, make_user):
    make_user("boss", role="admin")

    assert _login(client, "boss").json()["redirect"] == "/admin/dashboard"


def test_wrong_password_and_inactive_account_look_the_same(client, make_user):
    make_user("carol")
    make_user("dave", is_active=False)

    wrong = _login(client, "carol", "nope")
    inactive = _login(client, "dave")
    unknown = _login(client, "nobody")

    for response in (wrong, inactive, unknown):
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"


def test_session_reflects_cookie(client, make_user):
    make_user("erin")

    assert client.get("/api/auth/session").json()["data"] is None
    _login(client, "erin")
    assert client.get("/api/auth/session").json()["data"]["username"] == "erin"
    client.post("/api/auth/logout")
    assert client.get("/api/auth/session").json()["data"] is None


def test_expired_or_forged_tokens_are_ignored():
    user = {"id": "1", "username": "x", "role": "admin", "isActive": True, "permissions": []}
    expired = create_session_token(user, expires_delta=timedelta(seconds=-5))

    assert decode_session_token(expired) is None
    assert decode_session_token("not.a.token") is None
    assert decode_session_token(None) is None


def test_gate_redirects_anonymous_pages_to_login(client):
    response = client.get("/students", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/login?callbackUrl=%2Fstudents"


def test_gate_leaves_api_and_health_alone(client):
    assert client.get("/health").status_code == 200
    api = client.get("/api/students", follow_redirects=False)
    assert api.status_code == 403
    assert api.json()["error"]["code"] == "NOT_AUTHENTICATED"


def test_gate_admin_pages_and_login_page(client, make_user):
    make_user("frank", role="teacher")
    _login(client, "frank")

    admin_page = client.get("/admin/users", follow_redirects=False)
    login_page = client.get("/login", follow_redirects=False)
    home = client.get("/", follow_redirects=False)

    assert admin_page.status_code == 307
    assert admin_page.headers["location"] == "/"
    assert login_page.headers["location"] == "/"
    assert home.status_code == 200


def test_gate_sends_logged_in_admin_to_dashboard(client, make_user):
    make_user("gina", role="admin")
    _login(client, "gina")

    response = client.get("/login", follow_redirects=False)

    assert response.headers["location"] == "/admin/dashboard"


def test_stale_cookie_does_not_hide_a_valid_bearer_token(client, make_user, headers_for):
    editor = make_user("ivy", permissions=[{"module": "Students", "canView": True}])
    client.cookies.set("session_token", "expired.or.forged")

    with_header = client.get("/api/students", headers=headers_for(editor))
    without_header = client.get("/api/students")

    assert with_header.status_code == 200
    assert without_header.status_code == 403
