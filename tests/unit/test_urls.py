import pytest

from termtest.declaration.urls import add_protocol_if_missing, resolve_url


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("example.com", "https://example.com"),
        ("example.com/path?q=1", "https://example.com/path?q=1"),
        ("localhost:3000", "http://localhost:3000"),
        ("127.0.0.1:8080/app", "http://127.0.0.1:8080/app"),
        ("https://example.com", "https://example.com"),
        ("http://example.com", "http://example.com"),
    ],
)
def test_add_protocol_if_missing(raw, expected):
    assert add_protocol_if_missing(raw) == expected


def test_resolve_url_prefers_the_last_absolute_candidate():
    assert resolve_url("https://a.example.com", "https://b.example.com") == "https://b.example.com"


def test_resolve_url_skips_empty_candidates():
    assert resolve_url("https://a.example.com", None, "") == "https://a.example.com"


def test_resolve_url_joins_relative_candidates():
    assert resolve_url("https://a.example.com/shop/", "./cart", "?step=2") == "https://a.example.com/shop/cart?step=2"
    assert resolve_url("https://a.example.com", "/login") == "https://a.example.com/login"


def test_resolve_url_without_any_base_is_none():
    assert resolve_url(None, None, None) is None
    assert resolve_url(None, "/relative/only") is None
