# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from http import HTTPStatus
from typing import TYPE_CHECKING

from werkzeug.wrappers import Request

from liberator_friend.domain.users.entities import Identity

if TYPE_CHECKING:
    from .resource import Resource


@dataclass(slots=True, frozen=True)
class RequestContext:
    """What a resource hook sees of the request being served.

    ``media_type`` stays ``None`` until the resource has negotiated one;
    ``status`` is the code a rendered domain value will be sent with.
    """

    request: Request
    resource: Resource | None = None
    identity: Identity | None = None
    media_type: str | None = None
    status: int = HTTPStatus.OK

    def with_media_type(self, media_type: str | None) -> RequestContext:
        return replace(self, media_type=media_type)

    def with_status(self, status: int) -> RequestContext:
        return replace(self, status=int(status))


__all__ = ["RequestContext"]
