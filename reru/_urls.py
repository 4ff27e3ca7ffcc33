from __future__ import annotations

import typing

from ._exceptions import UrlParseError
from ._urlparse import ParseResult, form_urldecode, form_urlencode, urlparse

__all__ = ["URL"]


class URL:
    """
    An absolute URL.

    Instances are immutable; ``copy_*`` methods return new URLs.

    >>> url = URL("https://example.com/search")
    >>> str(url.copy_add_param("q", "rust").copy_add_param("q", "lang"))
    'https://example.com/search?q=rust&q=lang'
    """

    __slots__ = ("_uri_reference",)

    def __init__(self, url: URL | str = "") -> None:
        if isinstance(url, URL):
            self._uri_reference: ParseResult = url._uri_reference
        elif isinstance(url, str):
            self._uri_reference = urlparse(url)
        else:
            raise TypeError(
                f"Invalid type for url.  Expected str or URL, got {type(url)}: {url!r}"
            )

    @classmethod
    def _from_parse_result(cls, uri_reference: ParseResult) -> URL:
        url = cls.__new__(cls)
        url._uri_reference = uri_reference
        return url

    @property
    def scheme(self) -> str:
        return self._uri_reference.scheme

    @property
    def userinfo(self) -> str:
        return self._uri_reference.userinfo

    @property
    def host(self) -> str:
        return self._uri_reference.host

    @property
    def port(self) -> int | None:
        return self._uri_reference.port

    @property
    def netloc(self) -> str:
        return self._uri_reference.netloc

    @property
    def path(self) -> str:
        return self._uri_reference.path

    @property
    def query(self) -> str | None:
        """The raw query string, without the leading ``?``."""
        return self._uri_reference.query

    @property
    def fragment(self) -> str | None:
        return self._uri_reference.fragment

    @property
    def query_pairs(self) -> list[tuple[str, str]]:
        """Decoded ``(name, value)`` pairs from the query string, in order."""
        return form_urldecode(self.query or "")

    def copy_with(self, **kwargs: str | None) -> URL:
        return self._from_parse_result(self._uri_reference.copy_with(**kwargs))

    def copy_add_param(self, name: str, value: typing.Any) -> URL:
        """
        Append one form-encoded pair to the query string.

        Existing pairs, including ones with the same name, are kept. Values
        that aren't strings are converted with ``str()``.
        """
        encoded = form_urlencode([(str(name), str(value))])
        query = self.query
        query = encoded if not query else f"{query}&{encoded}"
        return self.copy_with(query=query)

    def __hash__(self) -> int:
        return hash(str(self))

    def __eq__(self, other: typing.Any) -> bool:
        if isinstance(other, str):
            try:
                other = URL(other)
            except UrlParseError:
                return False
        return isinstance(other, URL) and str(self) == str(other)

    def __str__(self) -> str:
        return str(self._uri_reference)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"
