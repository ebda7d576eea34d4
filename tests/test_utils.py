# File: tests/test_utils.py
import pytest

from privacy_scout.utils import (
    has_subdomain,
    normalize_origin,
    parse_origin,
    truncate_message,
    widen_to_parent_domain,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://example.com/login?next=/home#top", "https://example.com"),
        ("HTTPS://Example.COM", "https://example.com"),
        ("https://example.com:443/", "https://example.com"),
        ("http://example.com:80/a", "http://example.com"),
        ("http://example.com:8080/a", "http://example.com:8080"),
        ("https://user:pw@us.example.com/x", "https://us.example.com"),
        ("http://[::1]:8000/path", "http://[::1]:8000"),
        ("  https://example.com/  ", "https://example.com"),
    ],
)
def test_normalize_origin(raw, expected):
    assert normalize_origin(raw) == expected


@pytest.mark.parametrize("raw", ["example.com", "not a url", "mailto:someone@example.com", "http://host:99999/"])
def test_normalize_origin_passes_through_unparsable(raw):
    assert normalize_origin(raw) == raw
    assert parse_origin(raw) is None


@pytest.mark.parametrize(
    "raw",
    [
        "https://a.b.example.com/deep/path?q=1",
        "http://localhost:8080",
        "https://EXAMPLE.com:443",
        "example.com",
        "http://[2001:db8::1]/",
    ],
)
def test_normalize_origin_idempotent(raw):
    once = normalize_origin(raw)
    assert normalize_origin(once) == once


@pytest.mark.parametrize(
    "origin,expected",
    [
        ("https://a.b.example.com", True),
        ("https://us.example.com", True),
        ("https://example.com", False),
        ("http://localhost:8080", False),
        ("http://192.168.0.10", False),
        ("http://[2001:db8::1]", False),
        ("not a url", False),
    ],
)
def test_has_subdomain(origin, expected):
    assert has_subdomain(origin) is expected


def test_widen_to_parent_domain():
    assert widen_to_parent_domain("https://us.example.com") == "https://example.com"
    assert widen_to_parent_domain("http://a.b.example.com:8443") == "http://b.example.com"
    assert widen_to_parent_domain("https://example.com") is None
    assert widen_to_parent_domain("http://10.0.0.1") is None
    assert widen_to_parent_domain("garbage") is None


def test_widen_ignores_public_suffixes():
    # label heuristic only: multi-label TLDs widen past the registrable domain
    assert widen_to_parent_domain("https://a.b.co.uk") == "https://b.co.uk"
    assert widen_to_parent_domain("https://b.co.uk") == "https://co.uk"


def test_truncate_message():
    assert truncate_message(RuntimeError("x" * 600)) == "x" * 500
    assert truncate_message(RuntimeError("boom"), limit=2) == "bo"
    assert truncate_message(KeyError()) == "KeyError"
    assert truncate_message("plain text") == "plain text"
