# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from http import HTTPStatus

from flask import Blueprint, g, request
from werkzeug.exceptions import NotFound
from werkzeug.wrappers import Response

from liberator_friend.interfaces.http.context import RequestContext
from liberator_friend.interfaces.http.middleware.authentication import Authentication
from liberator_friend.interfaces.http.resource import Resource, render_hook
from liberator_friend.interfaces.http.resources import base_resource
from liberator_friend.interfaces.http.site import SITE_ROUTES

# the resource answers 405 itself for methods it does not allow
RESOURCE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def _literal_view(body: str, endpoint: str) -> Callable[[], str]:
    def view() -> str:
        return body

    view.__name__ = endpoint
    return view


class SiteController:
    def __init__(
        self,
        *,
        authentication: Authentication,
        routes: Sequence[tuple[str, str | Resource]] = SITE_ROUTES,
    ) -> None:
        self._authentication = authentication
        self._routes = tuple(routes)

    def not_found(self, _exc: NotFound) -> Response:
        identity = getattr(g, "identity", None)
        ctx = RequestContext(request=request, identity=identity, status=HTTPStatus.NOT_FOUND)
        response = render_hook(base_resource.handle_not_found, ctx)
        if not isinstance(response, Response):
            return Response(status=HTTPStatus.NOT_FOUND)
        response.vary.add("Accept")
        return response

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("site", __name__)
        for index, (path, target) in enumerate(self._routes):
            if isinstance(target, Resource):
                bp.add_url_rule(
                    path,
                    endpoint=target.name,
                    view_func=self._authentication.wrap(target),
                    methods=RESOURCE_METHODS,
                )
            else:
                endpoint = "index" if path == "/" else f"literal_{index}"
                bp.add_url_rule(
                    path,
                    endpoint=endpoint,
                    view_func=_literal_view(target, endpoint),
                    methods=["GET"],
                )
        bp.app_errorhandler(NotFound)(self.not_found)
        return bp
