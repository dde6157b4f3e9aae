from __future__ import annotations

from flask.testing import FlaskClient

from gamemarket.shared.config import SecurityConfig
from gamemarket.shared.middleware.client_ip import client_ip


def test_security_headers_present(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Cache-Control"] == "no-store"
    assert "Strict-Transport-Security" not in response.headers


def test_hsts_when_enabled(make_client) -> None:
    client = make_client(security=SecurityConfig(enable_rate_limit=False, enable_hsts=True))

    assert "max-age=31536000" in client.get("/health").headers["Strict-Transport-Security"]


def test_request_id_is_echoed(client: FlaskClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_metrics_exposes_request_counters(client: FlaskClient) -> None:
    client.get("/health")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.mimetype == "text/plain"
    assert "gamemarket_requests_total" in response.get_data(as_text=True)


def test_unknown_route_is_json_404(client: FlaskClient) -> None:
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found"}


def test_wrong_method_is_json_405(client: FlaskClient) -> None:
    response = client.put("/listings")

    assert response.status_code == 405
    assert response.get_json() == {"error": "method_not_allowed"}


def test_client_ip_prefers_first_forwarded_hop(app) -> None:
    with app.test_request_context("/", headers={"X-Forwarded-For": " 203.0.113.7 , 10.0.0.1"}):
        assert client_ip() == "203.0.113.7"

    with app.test_request_context("/", environ_base={"REMOTE_ADDR": "192.0.2.4"}):
        assert client_ip() == "192.0.2.4"
