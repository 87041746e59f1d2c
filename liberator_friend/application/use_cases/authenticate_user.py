# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from liberator_friend.domain.users.entities import Identity
from liberator_friend.domain.users.exceptions import InvalidCredentialsError
from liberator_friend.domain.users.repositories import PasswordHasher, UserStore
from liberator_friend.shared.logging import logger


class AuthenticateUserUseCase:
    def __init__(self, *, users: UserStore, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> Identity:
        user = self._users.lookup(username)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if not password_valid:
            logger.info(f"auth.authenticate: rejected username={username}")
            raise InvalidCredentialsError()

        logger.debug(f"auth.authenticate: ok username={username} roles={sorted(user.roles)}")
        return user.identity()
