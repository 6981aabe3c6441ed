# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from groupchat.infrastructure.db import Database
from groupchat.shared.errors import InfrastructureError
from groupchat.shared.logging import logger


class MiscController:
    def __init__(self, *, database: Database) -> None:
        self._database = database

    def health(self) -> tuple[Response, int]:
        try:
            self._database.check()
        except InfrastructureError as exc:
            logger.warning(f"health: database check failed: {exc.context}")
            return jsonify({"ok": False, "database": "error"}), int(exc.status)
        return jsonify({"ok": True, "database": "ok"}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp
