# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from werkzeug.wrappers import Response

from .conneg import select_media_type
from .context import RequestContext
from .representation import PLAIN, generic, to_response


class _Default(Enum):
    DEFAULT = "default"


DEFAULT = _Default.DEFAULT

MediaKey = str | _Default
ResponseMap = Mapping[MediaKey, Any]
MediaHandler = Callable[[RequestContext], Any]


def is_handler(entry: Any) -> bool:
    # werkzeug responses are WSGI callables but count as values here
    return callable(entry) and not isinstance(entry, Response)


def media_typed(*maps: ResponseMap) -> MediaHandler:
    """Build a handler that answers with the entry for the request's media type.

    Maps are merged left to right, later keys win. The media type is the
    one the resource negotiated, or else the client's favourite. Unknown
    types use the ``DEFAULT`` entry, sent as ``text/plain``; with no
    ``DEFAULT`` the handler returns ``None``.
    """
    merged: dict[MediaKey, Any] = {}
    for m in maps:
        merged.update(m)

    def handler(ctx: RequestContext) -> Any:
        parsed_type = ctx.media_type
        media_type = parsed_type or select_media_type(ctx.request.headers.get("Accept"))

        listed = media_type is not None and media_type in merged
        entry = merged[media_type] if listed else merged.get(DEFAULT)
        if entry is None:
            return None
        if is_handler(entry):
            return entry(ctx)
        if not listed:
            return generic(entry, ctx, PLAIN)
        if parsed_type != media_type:
            return generic(entry, ctx, media_type)
        return to_response(entry, ctx)

    return handler


def with_default(default_type: str, m: ResponseMap) -> dict[MediaKey, Any]:
    """Copy of ``m`` whose ``DEFAULT`` entry is the one under ``default_type``."""
    result = dict(m)
    if default_type in m:
        result[DEFAULT] = m[default_type]
    return result


__all__ = [
    "DEFAULT",
    "MediaHandler",
    "ResponseMap",
    "is_handler",
    "media_typed",
    "with_default",
]
