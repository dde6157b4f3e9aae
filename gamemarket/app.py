# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys

from flask import Flask
from flask_cors import CORS
from sqlalchemy.exc import ArgumentError

from gamemarket.infrastructure.container import Container
from gamemarket.infrastructure.db import Database, StoreConnectionError
from gamemarket.infrastructure.observability import configure_metrics
from gamemarket.infrastructure.seed_user import SeedUserError, seed_user
from gamemarket.interfaces.http.context import bind_container
from gamemarket.shared.config import AppConfig, load_config
from gamemarket.shared.config.current import bind_config
from gamemarket.shared.errors import StoreError, StoreUnavailableError
from gamemarket.shared.logging import logger, sanitize_message, setup_logging
from gamemarket.shared.middleware.csrf import configure_csrf
from gamemarket.shared.middleware.error_handler import configure_error_handling
from gamemarket.shared.middleware.request_logger import configure_request_logging


def _fatal(message: str) -> None:
    logger.critical(message)
    print(f"\n❌ STARTUP ERROR: {sanitize_message(message)}\n", file=sys.stderr)
    sys.exit(1)


def _start_store(config: AppConfig, database: Database | None) -> Database:
    """Return a connected store or terminate the process."""

    try:
        if database is None:
            database = Database(config.database)
        if not database.connected:
            database.connect()
    except (StoreConnectionError, ArgumentError) as exc:
        _fatal(f"Cannot connect to the database at {config.database.url}: {exc}")
    return database


def _seed(config: AppConfig, container: Container) -> None:
    try:
        seed_user(config.auth, container.create_user_use_case)
    except (SeedUserError, StoreError, StoreUnavailableError) as exc:
        _fatal(f"Cannot seed the initial user: {exc}")


def _add_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return resp


def create_app(
    config: AppConfig | None = None,
    *,
    database: Database | None = None,
    container: Container | None = None,
) -> Flask:
    """Build the app around a connected store.

    Tests pass a prepared ``container`` (or just a ``database``) to swap in
    fakes; in production both are created here from ``config``. A store that
    cannot be reached terminates the process with status 1.
    """

    if container is not None:
        config = config or container.config
        database = container.database
    config = config or load_config()
    setup_logging(config.log_level, debug_mode=config.debug_logging)

    database = _start_store(config, database)
    if container is None:
        container = Container(config, database)
    _seed(config, container)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    bind_config(app, config)
    bind_container(app, container)

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, config)
    configure_metrics(app, config)
    configure_csrf(app, config)

    cors_kwargs: dict[str, object] = {"origins": config.security.allowed_origins}
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.listings_controller.as_blueprint())

    _add_security_headers(app, config)

    logger.info(f"{config.observability.service_name} initialized (env={config.app_env})")
    return app
