"""
Transports send a finished request over the network and hand back the raw
response.

Any object with a matching ``send()`` method can be used as a transport.
``HTTPTransport`` is the default, built on ``httpx.Client``.
"""

from __future__ import annotations

import logging
import typing

import httpx

if typing.TYPE_CHECKING:
    import ssl
    from types import TracebackType

__all__ = ["DEFAULT_TIMEOUT", "HTTPTransport", "RawResponse", "Transport"]

logger = logging.getLogger("reru.transports")

DEFAULT_TIMEOUT = 30.0


class RawResponse(typing.Protocol):
    """The response shape a transport must return. ``httpx.Response`` fits."""

    @property
    def status_code(self) -> int: ...

    @property
    def headers(self) -> httpx.Headers: ...

    @property
    def http_version(self) -> str: ...

    @property
    def url(self) -> typing.Any: ...

    def iter_bytes(self) -> typing.Iterator[bytes]: ...

    def close(self) -> None: ...


@typing.runtime_checkable
class Transport(typing.Protocol):
    def send(
        self,
        method: str,
        url: str,
        headers: httpx.Headers,
        content: bytes | None,
    ) -> RawResponse: ...


class HTTPTransport:
    """
    Sends requests through an ``httpx.Client``.

    Pass an existing ``client`` to reuse its pool and settings, otherwise one
    is created from the keyword arguments and closed by ``close()``.
    Redirects are followed by default, so the response URL is the final one.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float | httpx.Timeout | None = DEFAULT_TIMEOUT,
        verify: bool | str | ssl.SSLContext = True,
        follow_redirects: bool = True,
        trust_env: bool = True,
        **kwargs: typing.Any,
    ) -> None:
        if client is None:
            client = httpx.Client(
                timeout=timeout,
                verify=verify,
                follow_redirects=follow_redirects,
                trust_env=trust_env,
                **kwargs,
            )
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    @property
    def client(self) -> httpx.Client:
        return self._client

    def send(
        self,
        method: str,
        url: str,
        headers: httpx.Headers,
        content: bytes | None,
    ) -> httpx.Response:
        request = self._client.build_request(
            method, url, headers=headers, content=content
        )
        logger.debug("Sending %s %s", method, url)
        return self._client.send(request, stream=True)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HTTPTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        self.close()
