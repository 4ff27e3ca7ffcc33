from __future__ import annotations

from ._models import Request
from ._urls import URL

__all__ = [
    "build",
    "connect",
    "delete",
    "get",
    "head",
    "options",
    "patch",
    "post",
    "put",
    "trace",
]


def build(method: str, url: URL | str) -> Request:
    """
    Start building a request with an arbitrary method.

    Raises ``UrlParseError`` if ``url`` is not a valid absolute URL.
    """
    return Request(method, url)


def options(url: URL | str) -> Request:
    """Create an ``OPTIONS`` request."""
    return Request("OPTIONS", url)


def get(url: URL | str) -> Request:
    """Create a ``GET`` request."""
    return Request("GET", url)


def post(url: URL | str) -> Request:
    """Create a ``POST`` request."""
    return Request("POST", url)


def put(url: URL | str) -> Request:
    """Create a ``PUT`` request."""
    return Request("PUT", url)


def delete(url: URL | str) -> Request:
    """Create a ``DELETE`` request."""
    return Request("DELETE", url)


def head(url: URL | str) -> Request:
    """Create a ``HEAD`` request."""
    return Request("HEAD", url)


def trace(url: URL | str) -> Request:
    """Create a ``TRACE`` request."""
    return Request("TRACE", url)


def connect(url: URL | str) -> Request:
    """Create a ``CONNECT`` request."""
    return Request("CONNECT", url)


def patch(url: URL | str) -> Request:
    """Create a ``PATCH`` request."""
    return Request("PATCH", url)
