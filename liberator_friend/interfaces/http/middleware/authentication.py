# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from flask import g, redirect, request
from werkzeug.datastructures import WWWAuthenticate
from werkzeug.wrappers import Response

from liberator_friend.infrastructure.auth.identity import IdentityResolver
from liberator_friend.interfaces.http.authorization import Unauthorized
from liberator_friend.interfaces.http.resource import Resource
from liberator_friend.shared.logging import logger, set_request_user

FORBIDDEN_MESSAGE = "Sorry, you do not have access to this resource."


class Authentication:
    """Composes resources with the session/Basic authentication layer."""

    def __init__(
        self,
        *,
        identities: IdentityResolver,
        login_uri: str,
        realm: str | None = None,
    ) -> None:
        self._identities = identities
        self._login_uri = login_uri
        self._realm = realm

    def wrap(self, resource: Resource) -> Callable[..., Any]:
        def view(**_kwargs: Any) -> Response:
            identity = self._identities.current_identity(request)
            g.identity = identity
            set_request_user(identity.username if identity else None)

            result = resource.handle(request, identity)
            if isinstance(result, Unauthorized):
                return self.challenge(result)

            if result.status_code == HTTPStatus.UNAUTHORIZED and self._realm:
                result.www_authenticate = WWWAuthenticate("basic", {"realm": self._realm})
            return result

        view.__name__ = f"{resource.name}_resource"
        return view

    def challenge(self, result: Unauthorized) -> Response:
        method = request.method
        path = request.path

        if result.identity is None:
            target = request.full_path.rstrip("?")
            self._identities.remember_target(target)
            logger.info(f"auth.challenge: anonymous {method} {path}, redirecting to login")
            return redirect(self._login_uri)

        logger.warning(
            f"auth.challenge: user {result.identity.username} lacks access to {method} {path}"
        )
        return Response(FORBIDDEN_MESSAGE, status=HTTPStatus.FORBIDDEN, mimetype="text/plain")


__all__ = ["Authentication", "FORBIDDEN_MESSAGE"]
