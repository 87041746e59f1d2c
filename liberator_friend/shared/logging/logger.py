"""Structured logging on top of loguru.

Every record carries the correlation id and the user of the request being
served, so the negotiation and authorization decisions of one request can
be read back together.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> "
    "<yellow>{extra[user]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")
_REQUEST_USER: ContextVar[str] = ContextVar("request_user", default="-")

_logger.configure(extra={"correlation_id": "-", "user": "-"})


def _request_context() -> dict[str, str]:
    return {"correlation_id": _CORRELATION_ID.get(), "user": _REQUEST_USER.get()}


class _InterceptHandler(logging.Handler):
    """Routes stdlib records (werkzeug, flask) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.opt(depth=depth, exception=record.exc_info).bind(**_request_context()).log(
            level, record.getMessage()
        )


class ContextualLogger:
    """Proxy for loguru that binds the request context on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(**_request_context()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def set_request_user(username: str | None) -> None:
    _REQUEST_USER.set(username or "-")


def clear_request_context() -> None:
    _CORRELATION_ID.set("-")
    _REQUEST_USER.set("-")


def _add_sink(target: Any, level: str, **options: Any) -> None:
    _logger.add(
        target,
        level=level,
        format=_FMT,
        filter=sanitize_record,
        backtrace=False,
        diagnose=False,
        **options,
    )


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    _logger.remove()
    _add_sink(sys.stderr, level, colorize=True)
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        _add_sink(log_file, level, colorize=False, enqueue=True, encoding="utf-8")

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)


logger = ContextualLogger()

__all__ = [
    "clear_request_context",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "set_request_user",
    "setup_logging",
]
