import pytest

from partsdesk.app_factory import create_auth_app


@pytest.fixture
def api(auth_app):
    return auth_app.test_client()


def test_health(api):
    resp = api.get("/")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "Server running"}


def test_login_success_issues_no_cookie(api):
    resp = api.post("/api/login", json={"userId": "Admin", "password": "Rangwala"})

    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "userId": "Admin"}
    assert "Set-Cookie" not in resp.headers


def test_login_accepts_email_field(api):
    resp = api.post("/api/login", json={"email": "Admin", "password": "Rangwala"})
    assert resp.status_code == 200


def test_wrong_password_is_generic_401(api):
    resp = api.post("/api/login", json={"userId": "Admin", "password": "wrong"})

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Invalid credentials"}


def test_unknown_user_matches_wrong_password(api):
    wrong_user = api.post("/api/login", json={"userId": "ghost", "password": "Rangwala"})
    wrong_password = api.post("/api/login", json={"userId": "Admin", "password": "wrong"})

    assert wrong_user.status_code == wrong_password.status_code == 401
    assert wrong_user.get_json() == wrong_password.get_json()


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "{}",
        '{"userId": "Admin"}',
    ],
)
def test_malformed_body_is_server_error(api, body):
    resp = api.post("/api/login", data=body, content_type="application/json")

    assert resp.status_code == 500
    assert "message" in resp.get_json()


def test_cors_allows_listed_origin(api):
    resp = api.options(
        "/api/login",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"
    assert "POST" in resp.headers.get("Access-Control-Allow-Methods", "")


def test_cors_ignores_other_origins(api):
    resp = api.post(
        "/api/login",
        json={"userId": "Admin", "password": "Rangwala"},
        headers={"Origin": "http://evil.example"},
    )
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_missing_credential_is_fatal(monkeypatch):
    monkeypatch.delenv("AUTH_PASSWORD_HASH", raising=False)
    monkeypatch.delenv("AUTH_PASSWORD", raising=False)

    with pytest.raises(RuntimeError):
        create_auth_app(overrides={"AUTH_PASSWORD_HASH": None, "AUTH_PASSWORD": None})
