# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Identity, UserRecord
from .exceptions import InvalidCredentialsError
from .repositories import PasswordHasher, UserStore

__all__ = ["Identity", "InvalidCredentialsError", "PasswordHasher", "UserRecord", "UserStore"]
