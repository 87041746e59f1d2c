# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable
from functools import cached_property

from liberator_friend.application.services.password_hashing import WerkzeugPasswordHasher
from liberator_friend.application.use_cases.authenticate_user import AuthenticateUserUseCase
from liberator_friend.infrastructure.auth.identity import IdentityResolver
from liberator_friend.infrastructure.user_store import (
    DEFAULT_USERS,
    InMemoryUserStore,
    SeedUser,
)
from liberator_friend.interfaces.http.controllers.auth_controller import AuthController
from liberator_friend.interfaces.http.controllers.site_controller import SiteController
from liberator_friend.interfaces.http.middleware.authentication import Authentication
from liberator_friend.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, *, seed_users: Iterable[SeedUser] = DEFAULT_USERS) -> None:
        self.config = config
        self._seed_users = tuple(seed_users)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.auth.password_hash_method)

    @cached_property
    def user_store(self) -> InMemoryUserStore:
        return InMemoryUserStore.from_seed(self._seed_users, self.password_hasher)

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            users=self.user_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def identity_resolver(self) -> IdentityResolver:
        return IdentityResolver(
            authenticate=self.authenticate_user_use_case,
            allow_basic_auth=self.config.auth.allow_basic_auth,
        )

    @cached_property
    def authentication(self) -> Authentication:
        auth = self.config.auth
        return Authentication(
            identities=self.identity_resolver,
            login_uri=auth.login_uri,
            realm=auth.realm if auth.allow_basic_auth else None,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        auth = self.config.auth
        return AuthController(
            identities=self.identity_resolver,
            login_uri=auth.login_uri,
            logout_uri=auth.logout_uri,
            landing_uri=auth.landing_uri,
        )

    @cached_property
    def site_controller(self) -> SiteController:
        return SiteController(authentication=self.authentication)
