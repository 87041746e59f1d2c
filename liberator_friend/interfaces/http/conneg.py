# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Content negotiation against the ``Accept`` header.

Parsing and matching are Werkzeug's ``MIMEAccept``. This module adds the
two rules Werkzeug leaves open: a ``q=0`` range excludes the types it
covers even when a broader range accepts them, and a wildcard offer
answers with the concrete type the client asked for.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from werkzeug.datastructures import MIMEAccept
from werkzeug.http import parse_accept_header
from werkzeug.wrappers import Request

from liberator_friend.shared.errors import ContractViolation

WILDCARD = "*"
ANY = "*/*"


@dataclass(slots=True, frozen=True)
class MediaRange:
    type: str
    subtype: str
    quality: float = 1.0

    @classmethod
    def parse(cls, value: str, quality: float = 1.0) -> MediaRange | None:
        value = value.strip().lower()
        if value == WILDCARD:
            value = ANY
        main, sep, sub = value.partition("/")
        if not sep or not main or not sub or "/" in sub:
            return None
        if main == WILDCARD and sub != WILDCARD:
            return None
        return cls(type=main, subtype=sub, quality=quality)

    @property
    def specificity(self) -> int:
        if self.type == WILDCARD:
            return 0
        if self.subtype == WILDCARD:
            return 1
        return 2

    def __str__(self) -> str:
        return f"{self.type}/{self.subtype}"


def _accept(accept_header: str) -> MIMEAccept:
    # MIMEAccept keeps its entries most specific first, so quality() reads
    # the most specific range matching a type.
    entries = []
    for value, quality in parse_accept_header(accept_header):
        media_range = MediaRange.parse(value, quality)
        if media_range is not None:
            entries.append((str(media_range), quality))
    return MIMEAccept(entries)


def parse_accept(accept_header: str) -> list[MediaRange]:
    """All ranges of the header, including ``q=0`` exclusions, best first.

    Order is quality, then specificity (``text/plain`` > ``text/*`` >
    ``*/*``), then position in the header.
    """
    ranges = [MediaRange.parse(value, quality) for value, quality in _accept(accept_header)]
    # stable on top of MIMEAccept's specificity order
    return sorted((r for r in ranges if r is not None), key=lambda r: -r.quality)


def _offer(candidate: str) -> MediaRange:
    offer = MediaRange.parse(candidate)
    if offer is None:
        raise ValueError(f"invalid media type offered: {candidate!r}")
    return offer


def _concrete(accept: MIMEAccept, offer: str) -> str:
    named = [
        value
        for value, quality in sorted(accept, key=lambda item: -item[1])
        if quality > 0 and WILDCARD not in value
    ]
    return MIMEAccept([(offer, 1)]).best_match(named, default=offer)


def select_media_type(
    accept_header: str | None, allowed: Sequence[str] | None = None
) -> str | None:
    """Pick the media type to serve.

    Without ``allowed`` this is the client's most favoured type. With
    ``allowed`` it is the entry the client rates highest; ties keep the
    order of ``allowed``. ``None`` means nothing is acceptable. A missing
    header accepts anything.
    """
    header = accept_header if accept_header is not None else ANY

    if allowed is None:
        for media_range in parse_accept(header):
            if media_range.quality > 0:
                return str(media_range)
        return None

    offers = {candidate: _offer(candidate) for candidate in allowed}
    accept = _accept(header)
    acceptable = [candidate for candidate in allowed if accept.quality(candidate) > 0]
    chosen = accept.best_match(acceptable)
    if chosen is None:
        return None
    if offers[chosen].specificity < 2:
        return _concrete(accept, chosen)
    return chosen


def accepted_types(request: Request) -> list[str] | None:
    """Types accepted by the request, best first; ``None`` without an Accept header."""
    accept_header = request.headers.get("Accept")
    if accept_header is None:
        return None
    return [str(r) for r in parse_accept(accept_header) if r.quality > 0]


def get_media(request: Request, allowed: Sequence[str] | None = None) -> str | None:
    """Media type of ``request``.

    With ``allowed`` the request must carry an ``Accept`` header; calling
    it on one without is a bug in the caller.
    """
    if allowed is None:
        types = accepted_types(request)
        return types[0] if types else None

    if "Accept" not in request.headers:
        raise ContractViolation("get_media with allowed types requires an Accept header")
    return select_media_type(request.headers["Accept"], allowed)


__all__ = [
    "ANY",
    "MediaRange",
    "accepted_types",
    "get_media",
    "parse_accept",
    "select_media_type",
]
