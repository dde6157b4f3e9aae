# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Access to the configuration bound to the running Flask app."""

from __future__ import annotations

from flask import Flask, current_app

from .settings import AppConfig, load_config

CONFIG_KEY = "GAMEMARKET_CONFIG"


def bind_config(app: Flask, config: AppConfig) -> None:
    app.config[CONFIG_KEY] = config


def current_config() -> AppConfig:
    config = current_app.config.get(CONFIG_KEY)
    if config is None:
        return load_config()
    return config


__all__ = ["CONFIG_KEY", "bind_config", "current_config"]
