# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authorization gate.

A resource that refuses a request does not raise: its
``handle_unauthorized`` hook may return an ``Unauthorized`` value instead
of a body. The router that composed the resource with the
authentication layer receives that value and decides on the challenge
(login redirect or 403).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from liberator_friend.domain.users.entities import Identity

from .context import RequestContext


@dataclass(slots=True, frozen=True)
class Unauthorized:
    identity: Identity | None
    handler: Any


def unauthorized(handler: Any, ctx: RequestContext) -> Unauthorized:
    return Unauthorized(identity=ctx.identity, handler=handler)


def roles(required: Iterable[str]) -> Callable[[Identity | None], bool]:
    """Predicate true when the identity holds any of ``required``."""
    if isinstance(required, str):
        required = (required,)
    required_roles = frozenset(required)

    def check(identity: Identity | None) -> bool:
        return identity is not None and identity.has_any_role(required_roles)

    return check


def is_authenticated(ctx: RequestContext) -> bool:
    return ctx.identity is not None


__all__ = ["Unauthorized", "is_authenticated", "roles", "unauthorized"]
