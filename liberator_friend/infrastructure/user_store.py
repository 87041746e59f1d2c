# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from liberator_friend.domain.exceptions import InvariantViolation
from liberator_friend.domain.users.entities import UserRecord
from liberator_friend.domain.users.repositories import PasswordHasher, UserStore
from liberator_friend.shared.logging import logger


@dataclass(slots=True, frozen=True)
class SeedUser:
    username: str
    password: str
    roles: frozenset[str]


# Dummy credentials of the demo site.
DEFAULT_USERS: tuple[SeedUser, ...] = (
    SeedUser(username="root", password="admin_password", roles=frozenset({"admin"})),
    SeedUser(username="jane", password="user_password", roles=frozenset({"user"})),
)


class InMemoryUserStore(UserStore):
    """Read-only user table built once at start."""

    def __init__(self, records: Mapping[str, UserRecord]) -> None:
        for key, record in records.items():
            if key != record.username:
                raise InvariantViolation(
                    f"table key {key!r} does not match record username {record.username!r}",
                    field="username",
                    value=key,
                )
        self._records = MappingProxyType(dict(records))

    @classmethod
    def from_seed(
        cls, seed: Iterable[SeedUser], password_hasher: PasswordHasher
    ) -> InMemoryUserStore:
        records = {
            user.username: UserRecord(
                username=user.username,
                password_hash=password_hasher.hash(user.password),
                roles=user.roles,
            )
            for user in seed
        }
        logger.info(f"user_store: loaded {len(records)} users")
        return cls(records)

    def lookup(self, username: str) -> UserRecord | None:
        return self._records.get(username)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["DEFAULT_USERS", "InMemoryUserStore", "SeedUser"]
