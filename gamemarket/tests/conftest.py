from __future__ import annotations

import os

os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("APP_ENV", "test")

from collections.abc import Callable, Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from gamemarket.app import create_app
from gamemarket.application.services.password_hashing import WerkzeugPasswordHasher
from gamemarket.infrastructure.container import Container
from gamemarket.infrastructure.db import Database
from gamemarket.shared.config import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    ListingsConfig,
    SecurityConfig,
)

SEED_USERNAME = "test"
SEED_PASSWORD = "password"


def _build_config(
    *,
    listings: ListingsConfig | None = None,
    security: SecurityConfig | None = None,
    auth: AuthConfig | None = None,
) -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key="test-secret",
        database=DatabaseConfig(url="sqlite://", connect_retries=0),
        auth=auth or AuthConfig(seed_username=SEED_USERNAME, seed_password=SEED_PASSWORD),
        listings=listings or ListingsConfig(),
        security=security or SecurityConfig(enable_rate_limit=False),
    )


def _build_container(config: AppConfig) -> Container:
    database = Database(config.database)
    database.connect()
    container = Container(config, database)
    # a low iteration count keeps the suite fast; hashes are still salted pbkdf2
    container.password_hasher = WerkzeugPasswordHasher("pbkdf2:sha256:1000")
    return container


@pytest.fixture()
def config() -> AppConfig:
    return _build_config()


@pytest.fixture()
def database(config: AppConfig) -> Iterator[Database]:
    db = Database(config.database)
    db.connect()
    yield db
    db.dispose()


@pytest.fixture()
def make_container() -> Iterator[Callable[..., Container]]:
    built: list[Container] = []

    def factory(**overrides) -> Container:
        container = _build_container(_build_config(**overrides))
        built.append(container)
        return container

    yield factory
    for container in built:
        container.database.dispose()


@pytest.fixture()
def make_client(make_container: Callable[..., Container]) -> Callable[..., FlaskClient]:
    """Build a test client for an app configured with the given sections."""

    def factory(**overrides) -> FlaskClient:
        return create_app(container=make_container(**overrides)).test_client()

    return factory


@pytest.fixture()
def container(make_container: Callable[..., Container]) -> Container:
    return make_container()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def credentials() -> dict[str, str]:
    return {"username": SEED_USERNAME, "password": SEED_PASSWORD}
