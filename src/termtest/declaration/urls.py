# src/termtest/declaration/urls.py

"""
Helpers for resolving the starting url of a test from its layered options.
"""

from urllib.parse import urljoin, urlsplit

_LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "::1"})


def add_protocol_if_missing(url: str) -> str:
    """Adds a scheme to a bare host; plain http for loopback addresses."""
    if "://" in url:
        return url
    host = urlsplit(f"//{url}").hostname
    scheme = "http" if host in _LOOPBACK_HOSTS else "https"
    return f"{scheme}://{url}"


def _is_relative(url: str) -> bool:
    return url.startswith(("/", "./", "../", "?", "#"))


def resolve_url(*candidates: str | None) -> str | None:
    """
    Resolves the effective url from candidates ordered least to most specific.

    Empty or missing candidates are skipped, so an unset override never
    masks a usable ancestor value. The first usable candidate becomes the
    base; each later one replaces it when absolute and is joined onto it
    when relative. Returns None when nothing absolute could be resolved.
    """
    result: str | None = None
    for candidate in candidates:
        if not candidate:
            continue
        if _is_relative(candidate):
            result = urljoin(result, candidate) if result else candidate
        else:
            result = add_protocol_if_missing(candidate)

    if result is None or "://" not in result:
        return None
    return result


# 🔼⚙️
