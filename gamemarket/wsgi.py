# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""WSGI entry point, e.g. ``gunicorn gamemarket.wsgi:app``."""

from gamemarket.app import create_app

app = create_app()
