from __future__ import annotations

import io
import json
import logging
import typing

import httpx

from ._body import Body, BufferBody, EmptyBody, FormBody, encode_json
from ._exceptions import DeserializationError, SerializationError
from ._transports import HTTPTransport, RawResponse, Transport
from ._urls import URL

__all__ = ["PreparedRequest", "Request", "Response"]

logger = logging.getLogger("reru")

T = typing.TypeVar("T")


class PreparedRequest(typing.NamedTuple):
    """A request with its body encoded, ready to hand to a transport."""

    method: str
    url: URL
    headers: httpx.Headers
    content: bytes | None


def _as_transport(transport: Transport | httpx.Client) -> Transport:
    if isinstance(transport, httpx.Client):
        return HTTPTransport(transport)
    if not isinstance(transport, Transport):
        raise TypeError(
            f"Expected a transport with a send() method, got {type(transport)}"
        )
    return transport


class Request:
    """
    A request under construction.

    Every builder method returns a new ``Request``; the one it was called on
    is left untouched, so partially built requests can be shared and reused.

    >>> request = (
    ...     Request("POST", "https://httpbin.org/post")
    ...     .param("show_env", "1")
    ...     .body_json(["蟹", "Ferris"])
    ... )
    >>> request.prepare().content
    b'["\\xe8\\x9f\\xb9","Ferris"]'
    """

    __slots__ = ("_method", "_url", "_headers", "_body", "_transport")

    def __init__(self, method: str, url: URL | str) -> None:
        self._method = method.upper()
        self._url = URL(url)
        self._headers = httpx.Headers()
        self._body: Body = EmptyBody()
        self._transport: Transport | None = None

    def _copy_with(self, **changes: typing.Any) -> Request:
        request = Request.__new__(Request)
        for name in self.__slots__:
            setattr(request, name, changes.get(name.lstrip("_"), getattr(self, name)))
        return request

    @property
    def method(self) -> str:
        return self._method

    @property
    def url(self) -> URL:
        return self._url

    @property
    def headers(self) -> httpx.Headers:
        # A copy, so callers can't modify the request behind its back.
        return self._headers.copy()

    @property
    def body(self) -> Body:
        return self._body

    @property
    def transport(self) -> Transport | None:
        return self._transport

    def param(self, name: str, value: typing.Any) -> Request:
        """Append ``name=value`` to the query string; ``value`` goes through ``str()``."""
        return self._copy_with(url=self._url.copy_add_param(name, value))

    def header(self, name: str, value: str) -> Request:
        """Set a header, replacing any value it already has."""
        headers = self._headers.copy()
        headers[name] = value
        return self._copy_with(headers=headers)

    def body_json(self, value: typing.Any) -> Request:
        """
        Serialize ``value`` as JSON and use it as the request body.

        The ``Content-Type`` becomes ``application/json``. Any form fields
        added earlier are dropped.
        """
        try:
            content = encode_json(value)
        except SerializationError as exc:
            exc.request = self
            raise
        return self._switch_body(BufferBody(content))

    def body_form(self, name: str, value: typing.Any) -> Request:
        """
        Add a form field to the request body.

        The first field replaces whatever body was set before and makes the
        ``Content-Type`` ``application/x-www-form-urlencoded``; later fields
        are appended after it.
        """
        if isinstance(self._body, FormBody):
            return self._copy_with(body=self._body.append(name, value))
        return self._switch_body(FormBody([(name, value)]))

    def _switch_body(self, body: Body) -> Request:
        headers = self._headers.copy()
        headers["Content-Type"] = body.content_type
        return self._copy_with(body=body, headers=headers)

    def client(self, transport: Transport | httpx.Client) -> Request:
        """
        Send this request through ``transport`` instead of a default one.

        An ``httpx.Client`` is wrapped in an ``HTTPTransport``; the client is
        not closed along with the response.
        """
        return self._copy_with(transport=_as_transport(transport))

    def prepare(self) -> PreparedRequest:
        return PreparedRequest(
            method=self._method,
            url=self._url,
            headers=self._headers.copy(),
            content=self._body.encode(),
        )

    def request(self) -> Response:
        """
        Send the request and return the response.

        Uses the transport given to ``client()``, or a new ``HTTPTransport``
        that is closed together with the response.
        """
        if self._transport is not None:
            return self._send(self._transport)
        logger.debug("No transport configured, creating a default HTTPTransport")
        transport = HTTPTransport()
        try:
            return self._send(transport, owned_transport=transport)
        except BaseException:
            transport.close()
            raise

    def request_with_client(self, transport: Transport | httpx.Client) -> Response:
        """Send the request through ``transport``, or an ``httpx.Client``."""
        return self._send(_as_transport(transport))

    def _send(
        self, transport: Transport, owned_transport: HTTPTransport | None = None
    ) -> Response:
        prepared = self.prepare()
        logger.debug(
            "%s %s (%s body)",
            prepared.method,
            prepared.url,
            type(self._body).__name__,
        )
        raw = transport.send(
            prepared.method, str(prepared.url), prepared.headers, prepared.content
        )
        return Response(raw, request=self, transport=owned_transport)

    def __eq__(self, other: typing.Any) -> bool:
        return (
            isinstance(other, Request)
            and self._method == other._method
            and self._url == other._url
            and self._headers == other._headers
            and self._body == other._body
            and self._transport is other._transport
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self._method!r}, {str(self._url)!r})>"


class Response(io.RawIOBase):
    """
    The response to a ``Request``.

    The body is read as a binary stream, once, front to back:

    >>> with reru.get("https://example.org").request() as response:  # doctest: +SKIP
    ...     data = response.read()

    Errors raised by the transport while reading propagate unchanged.
    """

    def __init__(
        self,
        raw: RawResponse,
        *,
        request: Request | None = None,
        transport: HTTPTransport | None = None,
    ) -> None:
        super().__init__()
        self._raw = raw
        self._request = request
        self._transport = transport
        self._chunks: typing.Iterator[bytes] | None = None
        self._pending = b""

    @property
    def raw(self) -> RawResponse:
        return self._raw

    @property
    def request(self) -> Request:
        if self._request is None:
            raise RuntimeError("The request instance has not been set on this response.")
        return self._request

    @property
    def status(self) -> int:
        return self._raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._raw.headers

    @property
    def version(self) -> str:
        return self._raw.http_version

    @property
    def url(self) -> URL:
        """The final URL, after any redirects the transport followed."""
        return URL(str(self._raw.url))

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: typing.Any) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed response.")
        if self._chunks is None:
            self._chunks = iter(self._raw.iter_bytes())
        while not self._pending:
            chunk = next(self._chunks, None)
            if chunk is None:
                return 0
            self._pending = chunk
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size

    def readall(self) -> bytes:
        if self.closed:
            raise ValueError("I/O operation on closed response.")
        if self._chunks is None:
            self._chunks = iter(self._raw.iter_bytes())
        data = self._pending + b"".join(self._chunks)
        self._pending = b""
        return data

    def parse_json(self, into: typing.Callable[[typing.Any], T] | None = None) -> T | typing.Any:
        """
        Read the rest of the body and decode it as JSON, then close the response.

        If ``into`` is given, the decoded value is passed to it and its result
        returned, e.g. ``response.parse_json(into=lambda d: User(**d))``.
        A ``TypeError``, ``ValueError`` or ``KeyError`` raised by ``into`` is
        reported as a ``DeserializationError``.
        """
        try:
            content = self.readall()
        finally:
            self.close()
        try:
            value = json.loads(content)
        except ValueError as exc:
            raise DeserializationError(
                f"Response body is not valid JSON: {exc}", request=self._request
            ) from exc
        if into is None:
            return value
        try:
            return into(value)
        except (TypeError, ValueError, KeyError) as exc:
            raise DeserializationError(
                f"Response JSON does not match {getattr(into, '__name__', into)!r}: {exc}",
                request=self._request,
            ) from exc

    def close(self) -> None:
        if self.closed:
            return
        if self._request is not None:
            logger.debug("Closing response for %s", self._request.url)
        try:
            self._raw.close()
        finally:
            if self._transport is not None:
                self._transport.close()
            super().close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} [{self.status}]>"
