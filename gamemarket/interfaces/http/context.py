# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, current_app

if TYPE_CHECKING:
    from gamemarket.infrastructure.container import Container

EXTENSION_KEY = "gamemarket"


def bind_container(app: Flask, container: Container) -> None:
    app.extensions[EXTENSION_KEY] = container


def current_container() -> Container:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["EXTENSION_KEY", "bind_container", "current_container"]
