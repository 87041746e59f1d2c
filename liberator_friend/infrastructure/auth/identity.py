# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Request, session

from liberator_friend.application.use_cases.authenticate_user import AuthenticateUserUseCase
from liberator_friend.domain.users.entities import Identity
from liberator_friend.domain.users.exceptions import InvalidCredentialsError
from liberator_friend.shared.logging import logger

SESSION_IDENTITY_KEY = "identity"
SESSION_TARGET_KEY = "unauthorized_uri"


def has_role(identity: Identity | None, role: str) -> bool:
    return identity is not None and identity.has_role(role)


class IdentityResolver:
    """Resolves the identity of a request from the session or Basic credentials."""

    def __init__(
        self, *, authenticate: AuthenticateUserUseCase, allow_basic_auth: bool = True
    ) -> None:
        self._authenticate = authenticate
        self._allow_basic_auth = allow_basic_auth

    def current_identity(self, request: Request) -> Identity | None:
        identity = Identity.from_session(session.get(SESSION_IDENTITY_KEY))
        if identity is not None:
            return identity

        if not self._allow_basic_auth:
            return None

        auth = request.authorization
        if auth is None or auth.type != "basic" or not auth.username:
            return None

        try:
            return self._authenticate.execute(auth.username, auth.password or "")
        except InvalidCredentialsError:
            logger.warning(
                f"Basic credentials rejected for {auth.username} on {request.method} {request.path}"
            )
            return None

    def login(self, username: str, password: str) -> Identity:
        identity = self._authenticate.execute(username, password)
        target = session.get(SESSION_TARGET_KEY)
        session.clear()
        if target is not None:
            session[SESSION_TARGET_KEY] = target
        session[SESSION_IDENTITY_KEY] = identity.to_session()
        return identity

    @staticmethod
    def logout() -> None:
        session.pop(SESSION_IDENTITY_KEY, None)
        session.pop(SESSION_TARGET_KEY, None)

    @staticmethod
    def remember_target(uri: str) -> None:
        session[SESSION_TARGET_KEY] = uri

    @staticmethod
    def pop_target(default: str) -> str:
        target = session.pop(SESSION_TARGET_KEY, None)
        if isinstance(target, str) and target.startswith("/") and not target.startswith("//"):
            return target
        return default


__all__ = ["IdentityResolver", "SESSION_IDENTITY_KEY", "SESSION_TARGET_KEY", "has_role"]
