# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Turning handler return values into finished responses.

A handler may hand back three kinds of value, and only one of them must
be rendered:

* ``AlreadyRendered``: a finished response marked for pass-through;
* ``Raw``: a Werkzeug response, or a Flask ``(body, status[, headers])``
  tuple, built by the handler itself;
* ``Domain``: plain data (strings, mappings, sequences) to be encoded for
  the negotiated media type.

Mappings are ambiguous on their own, so ``classify`` is the only place
that decides which case a value belongs to.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from flask import current_app
from markupsafe import escape
from werkzeug.wrappers import Response

from .context import RequestContext

PLAIN = "text/plain"
JSON = "application/json"
HTML = "text/html"


@dataclass(slots=True, frozen=True)
class AlreadyRendered:
    response: Response


@dataclass(slots=True, frozen=True)
class Raw:
    response: Response


@dataclass(slots=True, frozen=True)
class Domain:
    value: Any


Representation = AlreadyRendered | Raw | Domain


def _is_response_tuple(value: Any) -> bool:
    if not isinstance(value, tuple) or len(value) not in (2, 3):
        return False
    body, status = value[0], value[1]
    return isinstance(body, (str, bytes, Response)) and isinstance(status, int)


def classify(value: Any) -> Representation:
    if isinstance(value, AlreadyRendered):
        return value
    if isinstance(value, Response):
        return Raw(value)
    if _is_response_tuple(value):
        return Raw(current_app.make_response(value))
    return Domain(value)


def _render_plain(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return "\n".join(f"{key}={_render_plain(item)}" for key, item in value.items())
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return "\n".join(_render_plain(item) for item in value)
    return str(value)


def _render_json(value: Any) -> str:
    return current_app.json.dumps(value)


def _render_html(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return str(escape(value))
    if isinstance(value, Mapping):
        rows = "".join(
            f"<tr><th>{escape(key)}</th><td>{_render_html(item)}</td></tr>"
            for key, item in value.items()
        )
        return f"<table>{rows}</table>"
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        items = "".join(f"<li>{_render_html(item)}</li>" for item in value)
        return f"<ul>{items}</ul>"
    return str(escape(value))


RENDERERS: dict[str, Callable[[Any], str]] = {
    PLAIN: _render_plain,
    JSON: _render_json,
    HTML: _render_html,
}


def render(value: Any, media_type: str | None, status: int = HTTPStatus.OK) -> Response:
    """Encode domain data; unknown or missing media types fall back to text/plain."""
    if media_type not in RENDERERS:
        media_type = PLAIN
    body = RENDERERS[media_type](value)
    return Response(body, status=status, mimetype=media_type)


def to_response(value: Any, ctx: RequestContext) -> AlreadyRendered:
    representation = classify(value)
    if isinstance(representation, AlreadyRendered):
        return representation
    if isinstance(representation, Raw):
        return AlreadyRendered(representation.response)
    return AlreadyRendered(render(representation.value, ctx.media_type, ctx.status))


def generic(value: Any, ctx: RequestContext, media_type: str | None) -> AlreadyRendered:
    """Render ``value`` as ``media_type`` even though the resource never negotiated it."""
    return to_response(value, ctx.with_media_type(media_type))


def passthrough(
    body: str | bytes, status: int = HTTPStatus.OK, **kwargs: Any
) -> AlreadyRendered:
    """Wrap a body the caller already encoded so nothing re-renders it."""
    return AlreadyRendered(Response(body, status=status, **kwargs))


__all__ = [
    "AlreadyRendered",
    "Domain",
    "Raw",
    "Representation",
    "classify",
    "generic",
    "passthrough",
    "render",
    "to_response",
]
