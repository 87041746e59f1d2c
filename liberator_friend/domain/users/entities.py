# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Users of the demo site and the identities they authenticate as."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from liberator_friend.domain.exceptions import InvariantViolation


def _role_set(roles: Iterable[str]) -> frozenset[str]:
    if isinstance(roles, str):
        raise InvariantViolation(
            "roles must be a collection, not a string", field="roles", value=roles
        )
    return frozenset(str(role) for role in roles)


@dataclass(slots=True, frozen=True)
class UserRecord:
    """One row of the credentials table."""

    username: str
    password_hash: str
    roles: frozenset[str]

    def __post_init__(self) -> None:
        if not self.username:
            raise InvariantViolation("username must not be empty", field="username")
        if not self.password_hash:
            raise InvariantViolation("password hash must not be empty", field="password_hash")
        object.__setattr__(self, "roles", _role_set(self.roles))

    def identity(self) -> Identity:
        return Identity(username=self.username, roles=self.roles)


@dataclass(slots=True, frozen=True)
class Identity:
    """Authenticated principal attached to a request."""

    username: str
    roles: frozenset[str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "roles", _role_set(self.roles))

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_any_role(self, roles: Iterable[str]) -> bool:
        return not self.roles.isdisjoint(roles)

    def to_session(self) -> dict[str, Any]:
        return {"username": self.username, "roles": sorted(self.roles)}

    @classmethod
    def from_session(cls, data: Any) -> Identity | None:
        if not isinstance(data, dict):
            return None
        username = data.get("username")
        roles = data.get("roles")
        if not isinstance(username, str) or not isinstance(roles, list):
            return None
        return cls(username=username, roles=frozenset(roles))
