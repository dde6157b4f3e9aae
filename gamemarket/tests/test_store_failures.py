from __future__ import annotations

from collections.abc import Callable

import pytest
from sqlalchemy import text

from gamemarket.app import create_app
from gamemarket.infrastructure.container import Container
from gamemarket.infrastructure.db import Database
from gamemarket.infrastructure.db.models import User
from gamemarket.shared.config import AppConfig, DatabaseConfig, ListingsConfig
from gamemarket.shared.errors import StoreError, StoreUnavailableError


class ExplodingListingRepository:
    def list_all(self):
        raise RuntimeError("driver exploded: postgres://admin:hunter2@db/prod")

    def insert(self, fields, *, owner_id=None):
        raise RuntimeError("driver exploded")

    def find_by_id(self, listing_id):
        raise RuntimeError("driver exploded")

    def delete_by_id(self, listing_id):
        raise RuntimeError("driver exploded")


def test_unreachable_store_at_startup_exits_nonzero() -> None:
    config = AppConfig(
        app_env="test",
        database=DatabaseConfig(url="sqlite:////nonexistent/dir/gamemarket.db", connect_retries=0),
    )

    with pytest.raises(SystemExit) as excinfo:
        create_app(config)

    assert excinfo.value.code == 1


def test_malformed_database_url_exits_nonzero() -> None:
    config = AppConfig(app_env="test", database=DatabaseConfig(url="not a url"))

    with pytest.raises(SystemExit) as excinfo:
        create_app(config)

    assert excinfo.value.code == 1


def test_unconnected_database_refuses_sessions(config: AppConfig) -> None:
    database = Database(config.database)

    with pytest.raises(StoreUnavailableError):
        with database.session_scope():
            pass


def test_integrity_failure_maps_to_store_error(database: Database) -> None:
    with database.session_scope() as session:
        session.add(User(username="dup", password_hash="x"))

    with pytest.raises(StoreError):
        with database.session_scope() as session:
            session.add(User(username="dup", password_hash="y"))


def test_session_scope_commits(database: Database) -> None:
    with database.session_scope() as session:
        session.add(User(username="kept", password_hash="x"))

    with database.session_scope() as session:
        count = session.execute(text("SELECT COUNT(*) FROM users WHERE username = 'kept'"))
        assert count.scalar_one() == 1


def test_lost_store_returns_503(make_container: Callable[..., Container]) -> None:
    container = make_container(listings=ListingsConfig(require_auth=False))
    client = create_app(container=container).test_client()
    container.database.dispose()

    listed = client.get("/listings")
    created = client.post("/listings", json={"title": "x"})
    login = client.post("/login", json={"username": "test", "password": "password"})

    assert listed.status_code == 503
    assert listed.get_json() == {"error": "store_unavailable"}
    assert created.status_code == 503
    assert login.status_code == 503


def test_health_reports_store_state(make_container: Callable[..., Container]) -> None:
    container = make_container()
    client = create_app(container=container).test_client()

    healthy = client.get("/health")
    container.database.dispose()
    unhealthy = client.get("/health")

    assert healthy.status_code == 200
    assert healthy.get_json() == {"ok": True, "database": "ok"}
    assert unhealthy.status_code == 503


def test_unexpected_failure_is_generic_500(make_container: Callable[..., Container]) -> None:
    container = make_container(listings=ListingsConfig(require_auth=False))
    container.listing_repository = ExplodingListingRepository()
    client = create_app(container=container).test_client()

    response = client.get("/listings")

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}
    assert "hunter2" not in response.get_data(as_text=True)
