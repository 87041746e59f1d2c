# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

SENSITIVE_PATTERNS = [
    (r"(password\s*[:=]\s*['\"]?)([^'\"&\s,}]+)(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(passwd\s*[:=]\s*['\"]?)([^'\"&\s,}]+)(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(authorization['\"]?\s*:\s*['\"]?)(basic|bearer)\s+[^'\"\s,}]+", r"\1\2 ***REDACTED***", re.IGNORECASE),
    (r"(session\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{20,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(cookie['\"]?\s*:\s*['\"]?)([^'\"]+)(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
]


def sanitize_message(message: str) -> str:
    sanitized = message
    for pattern, replacement, flags in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=flags)
    return sanitized


def sanitize_record(record: dict[str, Any]) -> bool:
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["sanitize_message", "sanitize_record"]
