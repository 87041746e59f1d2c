from __future__ import annotations

import pytest
from werkzeug.test import EnvironBuilder
from werkzeug.wrappers import Request

from liberator_friend.interfaces.http.conneg import (
    MediaRange,
    accepted_types,
    get_media,
    parse_accept,
    select_media_type,
)
from liberator_friend.shared.errors import ContractViolation


def _request(accept: str | None = None) -> Request:
    headers = {"Accept": accept} if accept is not None else {}
    return Request(EnvironBuilder(headers=headers).get_environ())


def test_media_range_parse_and_specificity() -> None:
    assert MediaRange.parse("*") == MediaRange("*", "*")
    assert MediaRange.parse("Text/Plain") == MediaRange("text", "plain")
    assert MediaRange.parse("text") is None
    assert MediaRange.parse("*/json") is None

    assert MediaRange("*", "*").specificity == 0
    assert MediaRange("text", "*").specificity == 1
    assert MediaRange("text", "plain").specificity == 2


def test_parse_accept_orders_by_quality_then_specificity() -> None:
    ranges = parse_accept("*/*;q=0.8, text/*, text/html, application/json;q=0.9")

    assert [str(r) for r in ranges] == [
        "text/html",
        "text/*",
        "application/json",
        "*/*",
    ]


def test_parse_accept_breaks_quality_ties_by_specificity() -> None:
    header = "*/*;q=0.8, text/*;q=0.8, text/plain;q=0.8, application/json;q=0.9"
    ranges = parse_accept(header)

    assert [(str(r), r.quality) for r in ranges] == [
        ("application/json", 0.9),
        ("text/plain", 0.8),
        ("text/*", 0.8),
        ("*/*", 0.8),
    ]
    assert select_media_type(header, ["text/plain", "application/json"]) == "application/json"


def test_parse_accept_skips_malformed_entries() -> None:
    ranges = parse_accept("garbage, text/plain;q=abc, application/json")

    assert [str(r) for r in ranges] == ["application/json"]


def test_select_without_allowed_returns_favourite() -> None:
    assert select_media_type("text/html;q=0.2, application/json") == "application/json"
    assert select_media_type("*") == "*/*"
    assert select_media_type(None) == "*/*"
    assert select_media_type("text/plain;q=0") is None


def test_select_prefers_highest_quality() -> None:
    allowed = ["text/html", "application/json"]

    assert select_media_type("text/html;q=0.5, application/json", allowed) == "application/json"


def test_select_ties_keep_allowed_order() -> None:
    header = "text/plain, application/json"

    assert select_media_type(header, ["application/json", "text/plain"]) == "application/json"
    assert select_media_type(header, ["text/plain", "application/json"]) == "text/plain"


def test_select_wildcards_match_allowed_types() -> None:
    allowed = ["application/json", "text/plain"]

    assert select_media_type("text/*", allowed) == "text/plain"
    assert select_media_type("*/*", allowed) == "application/json"
    assert select_media_type(None, allowed) == "application/json"


def test_select_zero_quality_excludes_type() -> None:
    header = "text/plain;q=0, */*"

    assert select_media_type(header, ["text/plain"]) is None
    assert select_media_type(header, ["text/plain", "application/json"]) == "application/json"


def test_select_returns_none_when_nothing_matches() -> None:
    assert select_media_type("text/xml", ["text/plain"]) is None


def test_select_wildcard_offer_returns_concrete_type() -> None:
    assert select_media_type("text/csv", ["text/*"]) == "text/csv"


def test_select_rejects_invalid_offer() -> None:
    with pytest.raises(ValueError):
        select_media_type("text/plain", ["plain"])


@pytest.mark.parametrize(
    "header",
    ["text/html, application/json;q=0.5", "*/*", "text/*;q=0.3, text/plain;q=0.2", "*"],
)
def test_select_is_idempotent(header: str) -> None:
    allowed = ["text/plain", "application/json", "text/html"]
    chosen = select_media_type(header, allowed)

    assert chosen is not None
    assert select_media_type(header, allowed) == chosen
    assert select_media_type(chosen, allowed) == chosen


def test_accepted_types_without_header_is_none() -> None:
    assert accepted_types(_request()) is None
    assert accepted_types(_request("text/plain;q=0, application/json")) == ["application/json"]


def test_get_media_with_allowed_requires_accept_header() -> None:
    with pytest.raises(ContractViolation):
        get_media(_request(), ["text/plain"])


def test_get_media() -> None:
    assert get_media(_request("text/html;q=0.1, text/plain")) == "text/plain"
    assert get_media(_request("*/*"), ["application/json"]) == "application/json"
    assert get_media(_request()) is None
