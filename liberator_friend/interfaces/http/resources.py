# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Reusable resource parts.

``base_resource`` gives every resource short text and JSON error bodies
instead of HTML pages. ``friend_resource`` adds the unauthorized body;
HTML clients get an ``Unauthorized`` result so the authentication layer
can send them to the login page.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from http import HTTPStatus
from typing import Any

from .authorization import is_authenticated, roles, unauthorized
from .context import RequestContext
from .media_typed import DEFAULT, media_typed, with_default
from .representation import HTML, JSON, PLAIN, AlreadyRendered, passthrough
from .resource import ResourceSpec

NOT_FOUND_PAGE = "Route not found!"


def _not_found_page(ctx: RequestContext) -> AlreadyRendered:
    return passthrough(NOT_FOUND_PAGE, HTTPStatus.NOT_FOUND, mimetype=HTML)


def _error_map(message: str, json_message: str | None = None) -> dict[Any, Any]:
    return with_default(
        PLAIN,
        {
            JSON: {"success": False, "message": json_message or message},
            PLAIN: message,
        },
    )


base_resource = ResourceSpec(
    handle_not_found=media_typed(
        {HTML: _not_found_page},
        _error_map("Resource not found."),
    ),
    handle_not_acceptable=media_typed(
        _error_map(
            "No acceptable resource available.",
            json_message="No acceptable resource available",
        )
    ),
    handle_method_not_allowed=media_typed(_error_map("Method not allowed.")),
)


def _challenge(ctx: RequestContext) -> Any:
    resource = ctx.resource
    return unauthorized(resource.spec.authorized if resource else None, ctx)


friend_resource = base_resource.override(
    ResourceSpec(
        handle_unauthorized=media_typed(
            {
                HTML: _challenge,
                JSON: {"success": False, "message": "Not authorized!"},
                DEFAULT: lambda ctx: "Not authorized.",
            }
        )
    )
)


def friend_auth(auth_fn: Callable[[RequestContext], bool]) -> ResourceSpec:
    """Base part that authorizes with ``auth_fn``.

    Refused HTML clients are handed to the authentication layer.
    """
    return friend_resource.override(ResourceSpec(authorized=auth_fn))


def role_auth(role_input: Iterable[str]) -> ResourceSpec:
    """Base part that lets in identities holding any of ``role_input``."""
    check = roles(role_input)
    return friend_auth(lambda ctx: check(ctx.identity))


authenticated_base = friend_auth(is_authenticated)


__all__ = [
    "NOT_FOUND_PAGE",
    "authenticated_base",
    "base_resource",
    "friend_auth",
    "friend_resource",
    "role_auth",
]
