"""Tests for parsing ``type/subtype[;params]`` strings."""

import logging

import pytest

from mimekit.mime import (
    FrozenEntryError,
    MalformedTypeError,
    MediaType,
    MimeTypeBuilder,
    MimeTypeEntry,
    is_valid,
    parse,
)


def test_parse_none_returns_none() -> None:
    assert parse(None) is None
    assert MimeTypeEntry.parse(None) is None


def test_parse_with_quality() -> None:
    entry = parse("application/rdf+xml;q=0.9")

    assert entry is not None
    assert entry.quality == pytest.approx(0.9)
    assert entry.full_type == "application/rdf+xml"
    assert entry.major_type == "application"
    assert entry.subtype == "rdf+xml"
    assert entry.media_type == MediaType("application", "rdf+xml")


def test_parse_without_parameters_defaults_quality() -> None:
    entry = parse("text/plain")

    assert entry is not None
    assert entry.quality == 1.0
    assert not entry.is_any_subtype
    assert not entry.is_any_major_type


def test_parse_normalizes_case_and_whitespace() -> None:
    entry = parse("  Text / HTML ; charset=utf-8")

    assert entry is not None
    assert entry.full_type == "text/html"


def test_any_subtype() -> None:
    entry = parse("text/*")

    assert entry is not None
    assert entry.is_any_subtype is True
    assert entry.is_any_major_type is False
    assert entry.subtype == "*"
    assert entry.full_type == "text/*"


def test_any_major_type() -> None:
    entry = parse("*/*;q=0.1")

    assert entry is not None
    assert entry.is_any_major_type is True
    assert entry.is_any_subtype is True
    assert entry.media_type is None
    assert entry.full_type == "*/*"
    assert entry.name == "*/*"
    assert entry.quality == pytest.approx(0.1)


@pytest.mark.parametrize(
    "value",
    [
        "*/plain",
        "plain",
        "text",
        "",
        "/plain",
        "text/",
        " / ",
        "te xt/pl<ain",
        "text/plain/extra",
        "a@b/c",
        "text/pla\"in",
        "text/[x]",
        "téxt/plain",
    ],
)
def test_malformed_types(value: str) -> None:
    with pytest.raises(MalformedTypeError) as excinfo:
        parse(value)

    assert value in str(excinfo.value)


@pytest.mark.parametrize("value", ["text/plain", "TEXT/*;q=0.2", "*/*", "application/rdf+xml"])
def test_parsed_names_are_valid(value: str) -> None:
    entry = parse(value)

    assert entry is not None
    assert is_valid(entry.full_type)


def test_parsed_entries_are_frozen() -> None:
    entry = parse("text/plain")

    with pytest.raises(FrozenEntryError):
        MimeTypeBuilder(entry)  # type: ignore[arg-type]
    assert entry is not None
    assert entry.extensions == ()


def test_slash_only_inside_parameters_is_malformed() -> None:
    with pytest.raises(MalformedTypeError):
        parse("text;x=a/b")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("a/b;q=5", 1.0),
        ("a/b;q=0", 1.0),
        ("a/b;q=1", 1.0),
        ("a/b;q=-0.5", 1.0),
        ("a/b;q=notanumber", 1.0),
        ("a/b;q=nan", 1.0),
        ("a/b;q=inf", 1.0),
        ("a/b;q", 1.0),
        ("a/b;q=", 1.0),
        ("a/b;Q = 0.25", 0.25),
        ("a/b;level=1;q=0.5", 0.5),
        ("a/b;q=0.3;q=0.7", 0.7),
        ("a/b;q=0.3;q=oops", 0.3),
        ("a/b;q=0.3;q=7", 1.0),
    ],
)
def test_quality_parameter(value: str, expected: float) -> None:
    entry = parse(value)

    assert entry is not None
    assert entry.quality == pytest.approx(expected)


def test_unparsable_quality_is_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="mimekit.mime.entry"):
        parse("a/b;q=high")

    assert "high" in caplog.text


def test_round_trip_through_full_type() -> None:
    original = MimeTypeEntry(MediaType.parse("image/svg+xml"))

    reparsed = parse(original.full_type)

    assert reparsed == original
    assert reparsed is not None
    assert reparsed.full_type == original.full_type
