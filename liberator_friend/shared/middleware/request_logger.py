# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from liberator_friend.shared.config import AppConfig, load_config
from liberator_friend.shared.logging import (
    clear_request_context,
    get_correlation_id,
    logger,
    sanitize_message,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_REDACTED_HEADERS = frozenset({"authorization", "cookie"})


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _username() -> str | None:
    identity = getattr(g, "identity", None)
    return identity.username if identity is not None else None


def _visible_headers() -> dict[str, str]:
    return {
        key: "<redacted>" if key.lower() in _REDACTED_HEADERS else value
        for key, value in request.headers.items()
    }


def configure_request_logging(app: Flask, config: AppConfig | None = None) -> None:
    debug_mode = (config or load_config()).debug_logging

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8))
        g.request_started = time.perf_counter()

        accept = request.headers.get("Accept")
        if debug_mode:
            logger.debug(
                sanitize_message(
                    f"-> {request.method} {request.full_path.rstrip('?')} from {_client_ip()} "
                    f"headers={_visible_headers()}"
                )
            )
        else:
            logger.info(f"-> {request.method} {request.path} accept={accept!r}")

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed = time.perf_counter() - getattr(g, "request_started", time.perf_counter())
        logger.info(
            f"<- {request.method} {request.path} status={response.status_code} "
            f"type={response.mimetype} user={_username()} in {elapsed * 1000:.1f} ms"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on "
                f"{request.method} {request.path}, user={_username()}"
            )
        clear_request_context()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
