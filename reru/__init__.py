# ruff: noqa: I001
from .__version__ import __description__, __title__, __version__
from ._api import build, connect, delete, get, head, options, patch, post, put, trace
from ._body import Body, BufferBody, EmptyBody, FormBody
from ._exceptions import (
    DeserializationError,
    ReruError,
    SerializationError,
    TransportError,
    UrlParseError,
)
from ._models import PreparedRequest, Request, Response
from ._transports import DEFAULT_TIMEOUT, HTTPTransport, RawResponse, Transport
from ._urls import URL


__all__ = sorted(
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
    ),
    key=str.casefold,
)
