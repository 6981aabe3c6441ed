# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from groupchat.container import Container
from groupchat.infrastructure.db import Database
from groupchat.shared.config import AppConfig, load_config
from groupchat.shared.logging import logger, setup_logging
from groupchat.shared.middleware.error_handler import configure_error_handling
from groupchat.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, database: Database | None = None) -> Flask:
    config = config or load_config()
    setup_logging(debug_mode=config.debug_logging)

    container = Container(config, database)
    container.database.init_db()
    container.admin_setup.setup_admin_user()

    app = Flask(__name__)
    app.extensions["groupchat.container"] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(app, origins=config.security.allowed_origins)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.admin_controller.as_blueprint())
    app.register_blueprint(container.groups_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    logger.info(f"Server is running on http://localhost:{config.port}")
    app.run(host=config.host, port=config.port, debug=config.debug_logging)


if __name__ == "__main__":
    main()
