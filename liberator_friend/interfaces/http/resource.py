# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Declarative HTTP resources.

A resource is a bundle of hooks, each either a constant or a function of
the ``RequestContext``. Resources are assembled from ``ResourceSpec``
parts: a field set on a later part replaces the same field of an earlier
one, unset (``None``) fields leave it alone.

Serving a request walks the decisions in a fixed order:

    method allowed? -> authorized? -> acceptable media type? -> exists? -> ok
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields, replace
from http import HTTPStatus
from typing import Any

from werkzeug.wrappers import Request, Response

from liberator_friend.domain.users.entities import Identity
from liberator_friend.shared.logging import logger

from .authorization import Unauthorized
from .conneg import select_media_type
from .context import RequestContext
from .media_typed import is_handler
from .representation import to_response

DEFAULT_METHODS: tuple[str, ...] = ("GET", "HEAD")


def _upper_tuple(values: Iterable[str] | None) -> tuple[str, ...] | None:
    if values is None:
        return None
    if isinstance(values, str):
        values = (values,)
    return tuple(value.upper() for value in values)


@dataclass(slots=True, frozen=True)
class ResourceSpec:
    allowed_methods: tuple[str, ...] | None = None
    available_media_types: tuple[str, ...] | None = None
    exists: Any = None
    authorized: Any = None
    handle_ok: Any = None
    handle_not_found: Any = None
    handle_not_acceptable: Any = None
    handle_unauthorized: Any = None
    handle_method_not_allowed: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_methods", _upper_tuple(self.allowed_methods))
        if self.available_media_types is not None:
            media_types = self.available_media_types
            if isinstance(media_types, str):
                media_types = (media_types,)
            object.__setattr__(self, "available_media_types", tuple(media_types))

    def override(self, other: ResourceSpec) -> ResourceSpec:
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes)


BASE_SPEC = ResourceSpec(
    allowed_methods=DEFAULT_METHODS,
    available_media_types=("text/plain",),
    exists=True,
    authorized=True,
    handle_ok="OK",
    handle_not_found="Resource not found.",
    handle_not_acceptable="No acceptable resource available.",
    handle_unauthorized="Not authorized.",
    handle_method_not_allowed="Method not allowed.",
)


def compose(*parts: ResourceSpec) -> ResourceSpec:
    spec = ResourceSpec()
    for part in parts:
        spec = spec.override(part)
    return spec


def evaluate(hook: Any, ctx: RequestContext) -> Any:
    if is_handler(hook):
        return hook(ctx)
    return hook


def render_hook(hook: Any, ctx: RequestContext) -> Response | Unauthorized:
    """Run a handle_* hook and finish whatever it produced."""
    result = evaluate(hook, ctx)
    if isinstance(result, Unauthorized):
        return result
    if result is None:
        logger.warning(
            f"resource: no representation for status={ctx.status} "
            f"media_type={ctx.media_type} on {ctx.request.method} {ctx.request.path}"
        )
        return Response(status=ctx.status)
    return to_response(result, ctx).response


class Resource:
    def __init__(self, spec: ResourceSpec, name: str) -> None:
        self.spec = BASE_SPEC.override(spec)
        self.name = name

    @property
    def allowed_methods(self) -> tuple[str, ...]:
        return self.spec.allowed_methods or ()

    @property
    def available_media_types(self) -> tuple[str, ...]:
        return self.spec.available_media_types or ()

    def method_allowed(self, method: str) -> bool:
        method = method.upper()
        if method in self.allowed_methods:
            return True
        return method == "HEAD" and "GET" in self.allowed_methods

    def handle(
        self, request: Request, identity: Identity | None = None
    ) -> Response | Unauthorized:
        ctx = RequestContext(request=request, resource=self, identity=identity)

        if not self.method_allowed(request.method):
            response = render_hook(
                self.spec.handle_method_not_allowed,
                ctx.with_status(HTTPStatus.METHOD_NOT_ALLOWED),
            )
            if isinstance(response, Response):
                response.headers["Allow"] = ", ".join(self.allowed_methods)
            return self._vary(response)

        if not evaluate(self.spec.authorized, ctx):
            logger.info(
                f"resource.{self.name}: not authorized "
                f"user={identity.username if identity else None}"
            )
            return self._vary(
                render_hook(self.spec.handle_unauthorized, ctx.with_status(HTTPStatus.UNAUTHORIZED))
            )

        media_type = select_media_type(
            request.headers.get("Accept"), self.available_media_types
        )
        if media_type is None:
            logger.info(
                f"resource.{self.name}: not acceptable accept={request.headers.get('Accept')!r}"
            )
            return self._vary(
                render_hook(
                    self.spec.handle_not_acceptable, ctx.with_status(HTTPStatus.NOT_ACCEPTABLE)
                )
            )

        ctx = ctx.with_media_type(media_type)
        if not evaluate(self.spec.exists, ctx):
            return self._vary(
                render_hook(self.spec.handle_not_found, ctx.with_status(HTTPStatus.NOT_FOUND))
            )

        return self._vary(render_hook(self.spec.handle_ok, ctx))

    def _vary(self, response: Response | Unauthorized) -> Response | Unauthorized:
        if isinstance(response, Response):
            response.vary.add("Accept")
        return response

    def __repr__(self) -> str:
        return f"Resource({self.name!r})"


def define_resource(*parts: ResourceSpec, name: str, **overrides: Any) -> Resource:
    """Build a resource from ``parts`` plus keyword overrides, last one wins."""
    return Resource(compose(*parts, ResourceSpec(**overrides)), name)


__all__ = [
    "BASE_SPEC",
    "Resource",
    "ResourceSpec",
    "compose",
    "define_resource",
    "evaluate",
    "render_hook",
]
