from __future__ import annotations

from collections.abc import Callable

from flask.testing import FlaskClient

from gamemarket.interfaces.http.guard import SESSION_COOKIE
from gamemarket.shared.config import SecurityConfig


def _set_cookie_header(response) -> str:
    return next(
        header for header in response.headers.getlist("Set-Cookie")
        if header.startswith(f"{SESSION_COOKIE}=")
    )


def test_login_success_sets_session_cookie(
    client: FlaskClient, credentials: dict[str, str]
) -> None:
    response = client.post("/login", json=credentials)

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "redirect": "/admin.html"}
    cookie = _set_cookie_header(response)
    assert "HttpOnly" in cookie
    assert "Max-Age=86400" in cookie
    assert "SameSite=Lax" in cookie
    assert "Secure" not in cookie
    assert client.get_cookie(SESSION_COOKIE) is not None


def test_login_accepts_form_body(client: FlaskClient, credentials: dict[str, str]) -> None:
    response = client.post("/login", data=credentials)

    assert response.status_code == 200
    assert response.get_json()["ok"] is True


def test_login_failures_are_indistinguishable(client: FlaskClient) -> None:
    unknown = client.post("/login", json={"username": "nouser", "password": "x"})
    wrong = client.post("/login", json={"username": "test", "password": "wrongpw"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json() == wrong.get_json() == {"error": "invalid_credentials"}
    assert client.get_cookie(SESSION_COOKIE) is None


def test_login_malformed_payload_is_422(client: FlaskClient) -> None:
    response = client.post("/login", json={"username": "", "password": ""})

    assert response.status_code == 422
    body = response.get_json()
    assert body["error"] == "validation_error"
    assert set(body["context"]["fields"]) == {"username", "password"}


def test_login_response_never_echoes_password(
    client: FlaskClient, credentials: dict[str, str]
) -> None:
    response = client.post("/login", json=credentials)

    assert credentials["password"] not in response.get_data(as_text=True)


def test_login_is_rate_limited(make_client: Callable[..., FlaskClient]) -> None:
    client = make_client(security=SecurityConfig(enable_rate_limit=True))
    payload = {"username": "nouser", "password": "x"}

    statuses = [client.post("/login", json=payload).status_code for _ in range(11)]

    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429


def test_rate_limit_does_not_leak_between_apps(
    make_client: Callable[..., FlaskClient],
) -> None:
    security = SecurityConfig(enable_rate_limit=True)
    first = make_client(security=security)
    for _ in range(10):
        first.post("/login", json={"username": "nouser", "password": "x"})

    second = make_client(security=security)

    assert second.post("/login", json={"username": "nouser", "password": "x"}).status_code == 401


def test_logout_invalidates_token(client: FlaskClient, credentials: dict[str, str]) -> None:
    client.post("/login", json=credentials)
    token = client.get_cookie(SESSION_COOKIE).value

    response = client.post("/logout")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    assert client.get_cookie(SESSION_COOKIE) is None

    replay = client.get("/listings", headers={"Authorization": f"Bearer {token}"})
    assert replay.status_code == 401


def test_logout_requires_session(client: FlaskClient) -> None:
    response = client.post("/logout")

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized", "redirect": "/login.html"}


def test_bearer_header_is_accepted(client: FlaskClient, credentials: dict[str, str]) -> None:
    client.post("/login", json=credentials)
    token = client.get_cookie(SESSION_COOKIE).value
    client.delete_cookie(SESSION_COOKIE)

    response = client.get("/listings", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_secure_cookie_outside_local_env(
    make_client: Callable[..., FlaskClient], credentials: dict[str, str]
) -> None:
    client = make_client(security=SecurityConfig(enable_rate_limit=False, cookie_secure=True))

    response = client.post("/login", json=credentials)

    assert "Secure" in _set_cookie_header(response)


def test_login_rate_limit_follows_config(make_client: Callable[..., FlaskClient]) -> None:
    client = make_client(
        security=SecurityConfig(enable_rate_limit=True, rate_limit_requests=3, rate_limit_window=60)
    )
    payload = {"username": "nouser", "password": "x"}

    statuses = [client.post("/login", json=payload).status_code for _ in range(4)]

    assert statuses == [401, 401, 401, 429]


def test_rate_limit_keys_on_forwarded_client(make_client: Callable[..., FlaskClient]) -> None:
    client = make_client(security=SecurityConfig(enable_rate_limit=True, rate_limit_requests=1))
    payload = {"username": "nouser", "password": "x"}

    first = client.post("/login", json=payload, headers={"X-Forwarded-For": "10.0.0.1"})
    other = client.post("/login", json=payload, headers={"X-Forwarded-For": "10.0.0.2, 10.0.0.9"})
    again = client.post("/login", json=payload, headers={"X-Forwarded-For": "10.0.0.1"})

    assert (first.status_code, other.status_code, again.status_code) == (401, 401, 429)
