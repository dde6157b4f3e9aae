# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bootstrap of the initial login principal from configuration."""

from __future__ import annotations

from pydantic import ValidationError

from gamemarket.application.use_cases.users.create_user import CreateUserUseCase
from gamemarket.infrastructure.audit import AuditAction, audit_log
from gamemarket.interfaces.http.dto.auth import CreateUserDTO
from gamemarket.shared.config import AuthConfig
from gamemarket.shared.logging import logger


class SeedUserError(Exception):
    pass


def seed_user(config: AuthConfig, create_user: CreateUserUseCase) -> bool:
    """Create ``SEED_USERNAME`` with ``SEED_PASSWORD`` if it does not exist yet.

    Returns True when a user was created.
    """

    if not config.seed_username:
        logger.info("seed_user: no SEED_USERNAME configured, skipping")
        return False
    if not config.seed_password:
        raise SeedUserError("SEED_USERNAME is set but SEED_PASSWORD is empty")

    try:
        dto = CreateUserDTO(username=config.seed_username, password=config.seed_password)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(map(str, e['loc']))}: {e['msg']}"
            for e in exc.errors(include_url=False, include_input=False)
        )
        raise SeedUserError(f"invalid seed credentials ({problems})") from exc

    # stored in the same normalized form the login form submits
    user, created = create_user.ensure(dto.username, dto.password)
    if created:
        audit_log(AuditAction.USER_CREATED, user_id=user.id, details={"username": user.username})
        logger.info(f"seed_user: created user '{user.username}'")
    else:
        logger.info(f"seed_user: user '{user.username}' already exists")
    return created


__all__ = ["SeedUserError", "seed_user"]
