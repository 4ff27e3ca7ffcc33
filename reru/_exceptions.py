"""
Exceptions raised by reru.

Our exception hierarchy:

* ReruError
  + UrlParseError
  + SerializationError
  + DeserializationError

Failures coming from the transport (connection refused, DNS, TLS, timeouts,
reads interrupted mid-body) are not wrapped: they surface as whatever the
transport raises, ``httpx.TransportError`` and its subclasses for the default
transport.
"""

from __future__ import annotations

import typing

from httpx import TransportError

if typing.TYPE_CHECKING:
    from ._models import Request

__all__ = [
    "DeserializationError",
    "ReruError",
    "SerializationError",
    "TransportError",
    "UrlParseError",
]


class ReruError(Exception):
    """
    Base class for errors raised while building a request or decoding a response.
    """

    def __init__(self, message: str, *, request: Request | None = None) -> None:
        super().__init__(message)
        self._request = request

    @property
    def request(self) -> Request:
        if self._request is None:
            raise RuntimeError("The .request property has not been set.")
        return self._request

    @request.setter
    def request(self, request: Request) -> None:
        self._request = request


class UrlParseError(ReruError, ValueError):
    """
    The URL given to a request could not be parsed.
    """


class SerializationError(ReruError, ValueError):
    """
    A value passed to ``body_json()`` has no JSON encoding.
    """


class DeserializationError(ReruError, ValueError):
    """
    A response body is not valid JSON, or does not fit the requested shape.
    """
