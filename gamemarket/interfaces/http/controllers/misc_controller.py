# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from gamemarket.infrastructure.db import Database
from gamemarket.infrastructure.health import check_database
from gamemarket.infrastructure.observability import metrics_response


class MiscController:
    def __init__(self, *, database: Database) -> None:
        self._database = database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self):
        if check_database(self._database):
            return jsonify({"ok": True, "database": "ok"}), 200
        return jsonify({"ok": False, "database": "unavailable"}), 503

    def metrics(self):
        return metrics_response()
