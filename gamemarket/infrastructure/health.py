# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from gamemarket.infrastructure.db import Database


def check_database(database: Database) -> bool:
    if not database.connected:
        return False
    try:
        database.ping()
    except SQLAlchemyError:
        return False
    return True


__all__ = ["check_database"]
