# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from liberator_friend.container import Container
from liberator_friend.shared.config import AppConfig, load_config
from liberator_friend.shared.logging import logger, setup_logging
from liberator_friend.shared.middleware.error_handler import configure_error_handling
from liberator_friend.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)
    setup_logging(config.log_level, config.log_file)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.secret_key,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        SESSION_COOKIE_SECURE=config.is_production(),
    )
    app.extensions["liberator_friend"] = container

    configure_error_handling(app, config)
    configure_request_logging(app, config)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.site_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host=config.server.host, port=config.server.port, debug=not config.is_production())


if __name__ == "__main__":
    main()
