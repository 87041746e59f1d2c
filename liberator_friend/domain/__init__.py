# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation
from .users.entities import Identity, UserRecord

__all__ = [
    "Identity",
    "InvariantViolation",
    "UserRecord",
]
