# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from .resource import Resource, define_resource
from .resources import authenticated_base, role_auth

WELCOME = "Welcome to the liberator-friend demo site!"

admin_resource = define_resource(
    role_auth({"admin"}),
    name="admin",
    allowed_methods=("GET",),
    available_media_types=("text/plain",),
    handle_ok="Welcome, admin!",
)

user_resource = define_resource(
    role_auth({"user"}),
    name="user",
    allowed_methods=("GET",),
    available_media_types=("text/plain",),
    handle_ok="Welcome, user!",
)

authenticated_resource = define_resource(
    authenticated_base,
    name="authenticated",
    allowed_methods=("GET",),
    available_media_types=("text/plain",),
    handle_ok="Come on in. You're authenticated.",
)

SITE_ROUTES: tuple[tuple[str, str | Resource], ...] = (
    ("/", WELCOME),
    ("/admin", admin_resource),
    ("/authenticated", authenticated_resource),
    ("/user", user_resource),
)

__all__ = [
    "SITE_ROUTES",
    "WELCOME",
    "admin_resource",
    "authenticated_resource",
    "user_resource",
]
