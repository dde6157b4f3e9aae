# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Create a login principal in the configured database."""

from __future__ import annotations

import argparse
import getpass
import sys

from pydantic import ValidationError

from gamemarket.domain.users.exceptions import UserAlreadyExistsError
from gamemarket.infrastructure.container import Container
from gamemarket.infrastructure.db import Database, StoreConnectionError
from gamemarket.interfaces.http.dto.auth import CreateUserDTO
from gamemarket.shared.config import load_config
from gamemarket.shared.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user that can log in")
    parser.add_argument("username")
    parser.add_argument(
        "--password-stdin",
        action="store_true",
        help="Read the password from the first line of stdin instead of prompting",
    )
    args = parser.parse_args(argv)

    if args.password_stdin:
        password = sys.stdin.readline().rstrip("\n")
    else:
        password = getpass.getpass("Password: ")
        if password != getpass.getpass("Repeat password: "):
            print("Passwords do not match", file=sys.stderr)
            return 2

    try:
        dto = CreateUserDTO(username=args.username, password=password)
    except ValidationError as exc:
        for error in exc.errors(include_url=False, include_input=False):
            print(f"{'.'.join(map(str, error['loc']))}: {error['msg']}", file=sys.stderr)
        return 2

    config = load_config()
    setup_logging(config.log_level)
    database = Database(config.database)
    try:
        database.connect()
    except StoreConnectionError as exc:
        print(f"Cannot connect to the database: {exc}", file=sys.stderr)
        return 1

    try:
        user = Container(config, database).create_user_use_case.execute(dto.username, dto.password)
    except UserAlreadyExistsError:
        print(f"User '{dto.username}' already exists", file=sys.stderr)
        return 1
    finally:
        database.dispose()

    print(f"Created user '{user.username}' (id={user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
