# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    """Error that maps onto a JSON error body: ``{"error": code, ...}``."""

    code: str
    status: HTTPStatus
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.message:
            payload["message"] = self.message
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Subclasses declare ``default_code``, ``default_status`` and ``default_message``."""

    default_code: ClassVar[str] = "domain_error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    default_message: ClassVar[str | None] = None

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            code=self.default_code,
            status=self.default_status,
            message=self.default_message,
            context=context,
        )


class ValidationError(AppError):
    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            code="validation_error",
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            message="Request payload is invalid.",
            context=context,
        )


class ContractViolation(AssertionError):
    """A caller broke a precondition; this is a programming error."""


__all__ = [
    "AppError",
    "ContractViolation",
    "DomainError",
    "ValidationError",
]
