from __future__ import annotations

import ipaddress
import re
import typing

import idna

from ._exceptions import UrlParseError

MAX_URL_LENGTH = 65536

UNRESERVED_CHARACTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
SUB_DELIMS = "!$&'()*+,;="

# Bytes left as-is by the application/x-www-form-urlencoded serializer.
FORM_SAFE = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789*-._"
)

PERCENT_ENCODED_REGEX = re.compile("%[A-Fa-f0-9]{2}")
PERCENT_ENCODED_BYTES_REGEX = re.compile(b"%[A-Fa-f0-9]{2}")

_ALWAYS_EXCLUDED = (0x20, 0x22, 0x3C, 0x3E)
_PATH_EXCLUDED = _ALWAYS_EXCLUDED + (0x23, 0x3F, 0x60, 0x7B, 0x7D)
_USERINFO_EXTRA = (0x2F, 0x3B, 0x3D, 0x40, 0x5B, 0x5C, 0x5D, 0x5E, 0x7C)


def _safe_chars(*excluded: int) -> str:
    excluded_set = set(excluded)
    return "".join(chr(i) for i in range(0x20, 0x7F) if i not in excluded_set)


FRAG_SAFE = _safe_chars(*_ALWAYS_EXCLUDED, 0x60)
QUERY_SAFE = _safe_chars(*_ALWAYS_EXCLUDED, 0x23)
PATH_SAFE = _safe_chars(*_PATH_EXCLUDED)
USERINFO_SAFE = _safe_chars(*_PATH_EXCLUDED, *_USERINFO_EXTRA)

URL_REGEX = re.compile(
    r"(?:(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*):)?"
    r"(?://(?P<authority>[^/?#]*))?"
    r"(?P<path>[^?#]*)"
    r"(?:\?(?P<query>[^#]*))?"
    r"(?:#(?P<fragment>.*))?"
)

AUTHORITY_REGEX = re.compile(
    r"(?:(?P<userinfo>.*)@)?(?P<host>(\[.*\]|[^:@]*)):?(?P<port>.*)?"
)

COMPONENT_REGEX = {
    "path": re.compile("[^?#]*"),
    "query": re.compile("[^#]*"),
    "fragment": re.compile(".*"),
}

IPv4_STYLE_HOSTNAME = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+\.[0-9]+$")
IPv6_STYLE_HOSTNAME = re.compile(r"^\[.*\]$")

DEFAULT_PORTS = {"ftp": 21, "http": 80, "https": 443, "ws": 80, "wss": 443}

# Schemes that cannot be used without a host.
SPECIAL_SCHEMES = frozenset(DEFAULT_PORTS) | {"file"}


class ParseResult(typing.NamedTuple):
    scheme: str
    userinfo: str
    host: str
    port: int | None
    path: str
    query: str | None
    fragment: str | None

    @property
    def authority(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return "".join([
            f"{self.userinfo}@" if self.userinfo else "",
            host,
            f":{self.port}" if self.port is not None else "",
        ])

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return host + (f":{self.port}" if self.port is not None else "")

    def copy_with(self, **kwargs: str | None) -> ParseResult:
        """Return a copy with the given path, query or fragment replaced."""
        if not kwargs:
            return self
        for key, value in kwargs.items():
            if key not in COMPONENT_REGEX:
                raise TypeError(f"copy_with() got an unexpected keyword argument {key!r}")
            if value is not None:
                _validate_non_printable(value, f"URL {key} component")
                if not COMPONENT_REGEX[key].fullmatch(value):
                    raise UrlParseError(f"Invalid URL component '{key}'")
        path = kwargs.get("path", self.path) or ""
        query = kwargs.get("query", self.query)
        frag = kwargs.get("fragment", self.fragment)
        return self._replace(
            path=quote(path, safe=PATH_SAFE),
            query=None if query is None else quote(query, safe=QUERY_SAFE),
            fragment=None if frag is None else quote(frag, safe=FRAG_SAFE),
        )

    def __str__(self) -> str:
        authority = self.authority
        return "".join([
            f"{self.scheme}:",
            f"//{authority}" if authority or self.scheme in SPECIAL_SCHEMES else "",
            self.path,
            f"?{self.query}" if self.query is not None else "",
            f"#{self.fragment}" if self.fragment is not None else "",
        ])


def _validate_non_printable(value: str, label: str) -> None:
    if any(char.isascii() and not char.isprintable() for char in value):
        char = next(c for c in value if c.isascii() and not c.isprintable())
        raise UrlParseError(f"Invalid non-printable ASCII character in {label}, {char!r} at position {value.find(char)}.")


def urlparse(url: str) -> ParseResult:
    """Parse and normalize an absolute URL.

    Relative references are rejected, there is no base URL to resolve them
    against.
    """
    if len(url) > MAX_URL_LENGTH:
        raise UrlParseError("URL too long")

    url = url.strip(" ")
    _validate_non_printable(url, "URL")

    url_dict = URL_REGEX.match(url).groupdict()  # type: ignore[union-attr]

    scheme = url_dict["scheme"] or ""
    authority = url_dict["authority"]
    path = url_dict["path"] or ""
    query = url_dict["query"]
    frag = url_dict["fragment"]

    if not scheme:
        raise UrlParseError(f"Relative URL without a base: {url!r}")

    authority_dict = AUTHORITY_REGEX.match(authority or "").groupdict()  # type: ignore[union-attr]

    userinfo = authority_dict["userinfo"] or ""
    host = authority_dict["host"] or ""
    port = authority_dict["port"]

    parsed_scheme = scheme.lower()
    parsed_userinfo = quote(userinfo, safe=USERINFO_SAFE)
    parsed_host = encode_host(host)
    parsed_port = normalize_port(port, parsed_scheme)

    if parsed_scheme in SPECIAL_SCHEMES and parsed_scheme != "file" and not parsed_host:
        raise UrlParseError(f"Empty host in URL: {url!r}")

    has_authority = authority is not None
    validate_path(path, has_authority=has_authority)
    path = normalize_path(path)
    if has_authority and not path and parsed_scheme in SPECIAL_SCHEMES:
        path = "/"

    return ParseResult(
        parsed_scheme,
        parsed_userinfo,
        parsed_host,
        parsed_port,
        quote(path, safe=PATH_SAFE),
        None if query is None else quote(query, safe=QUERY_SAFE),
        None if frag is None else quote(frag, safe=FRAG_SAFE),
    )


def encode_host(host: str) -> str:
    if not host:
        return ""

    if IPv4_STYLE_HOSTNAME.match(host):
        try:
            ipaddress.IPv4Address(host)
        except ipaddress.AddressValueError:
            raise UrlParseError(f"Invalid IPv4 address: {host!r}")
        return host

    if IPv6_STYLE_HOSTNAME.match(host):
        try:
            ipaddress.IPv6Address(host[1:-1])
        except ipaddress.AddressValueError:
            raise UrlParseError(f"Invalid IPv6 address: {host!r}")
        return host[1:-1]

    if host.isascii():
        if any(char in host for char in " <>@[]^"):
            raise UrlParseError(f"Invalid character in host: {host!r}")
        WHATWG_SAFE = '"`{}%|\\'
        return quote(host.lower(), safe=SUB_DELIMS + WHATWG_SAFE)

    try:
        return idna.encode(host.lower()).decode("ascii")
    except idna.IDNAError:
        raise UrlParseError(f"Invalid IDNA hostname: {host!r}")


def normalize_port(port: str | int | None, scheme: str) -> int | None:
    if not port and port != 0:
        return None
    try:
        port_as_int = int(port)  # type: ignore[arg-type]
    except ValueError:
        raise UrlParseError(f"Invalid port: {port!r}")
    if not 0 <= port_as_int <= 65535:
        raise UrlParseError(f"Invalid port: {port!r}")
    default = DEFAULT_PORTS.get(scheme)
    return None if port_as_int == default else port_as_int


def validate_path(path: str, has_authority: bool) -> None:
    if has_authority and path and not path.startswith("/"):
        raise UrlParseError("For absolute URLs, path must be empty or begin with '/'")


def normalize_path(path: str) -> str:
    if "." not in path:
        return path
    components = path.split("/")
    if "." not in components and ".." not in components:
        return path
    output: list[str] = []
    for component in components:
        if component == "..":
            if output and output != [""]:
                output.pop()
        elif component != ".":
            output.append(component)
    return "/".join(output)


def _percent_encode(string: str) -> str:
    return "".join(f"%{byte:02X}" for byte in string.encode("utf-8"))


def percent_encoded(string: str, safe: str) -> str:
    non_escaped = UNRESERVED_CHARACTERS + safe
    if not string.rstrip(non_escaped):
        return string
    return "".join(c if c in non_escaped else _percent_encode(c) for c in string)


def quote(string: str, safe: str) -> str:
    parts: list[str] = []
    pos = 0
    for match in re.finditer(PERCENT_ENCODED_REGEX, string):
        start, end = match.start(), match.end()
        if start != pos:
            parts.append(percent_encoded(string[pos:start], safe=safe))
        parts.append(match.group(0))
        pos = end
    if pos != len(string):
        parts.append(percent_encoded(string[pos:], safe=safe))
    return "".join(parts)


def form_quote(string: str) -> str:
    """Encode one name or value the way HTML forms do."""
    return "".join(
        chr(byte) if byte in FORM_SAFE else "+" if byte == 0x20 else f"%{byte:02X}"
        for byte in string.encode("utf-8")
    )


def form_urlencode(pairs: typing.Iterable[tuple[str, str]]) -> str:
    return "&".join(f"{form_quote(name)}={form_quote(value)}" for name, value in pairs)


def form_unquote(string: str) -> str:
    data = string.replace("+", " ").encode("utf-8")
    raw = bytearray()
    pos = 0
    while pos < len(data):
        chunk = data[pos:pos + 3]
        if PERCENT_ENCODED_BYTES_REGEX.fullmatch(chunk):
            raw.append(int(chunk[1:], 16))
            pos += 3
        else:
            raw.append(data[pos])
            pos += 1
    return raw.decode("utf-8", errors="replace")


def form_urldecode(query: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in query.split("&"):
        if not item:
            continue
        name, _, value = item.partition("=")
        pairs.append((form_unquote(name), form_unquote(value)))
    return pairs
