# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from liberator_friend.shared.config import AppConfig, load_config
from liberator_friend.shared.errors import register_error_handler


def configure_error_handling(app: Flask, config: AppConfig | None = None) -> None:
    register_error_handler(app, debug_mode=(config or load_config()).debug_logging)


__all__ = ["configure_error_handling"]
