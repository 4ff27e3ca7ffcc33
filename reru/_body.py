from __future__ import annotations

import json
import typing

from ._exceptions import SerializationError
from ._urlparse import form_urlencode

__all__ = [
    "Body",
    "BufferBody",
    "EmptyBody",
    "FormBody",
    "encode_json",
]

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Body:
    """
    The payload of a request. Exactly one subclass is active at a time.
    """

    __slots__ = ()

    #: ``Content-Type`` set on the request when it switches to this kind of body.
    content_type: typing.ClassVar[str | None] = None

    def encode(self) -> bytes | None:
        raise NotImplementedError()  # pragma: no cover

    def __eq__(self, other: typing.Any) -> bool:
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def _key(self) -> typing.Any:
        return ()


class EmptyBody(Body):
    __slots__ = ()

    def encode(self) -> None:
        return None

    def __repr__(self) -> str:
        return "EmptyBody()"


class BufferBody(Body):
    """Opaque bytes sent as-is, e.g. a serialized JSON document."""

    __slots__ = ("data",)

    content_type = JSON_CONTENT_TYPE

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    def encode(self) -> bytes:
        return self.data

    def _key(self) -> typing.Any:
        return self.data

    def __repr__(self) -> str:
        return f"BufferBody({self.data!r})"


class FormBody(Body):
    """Form fields, in the order they were added. Encoded only when sent."""

    __slots__ = ("fields",)

    content_type = FORM_CONTENT_TYPE

    def __init__(self, fields: typing.Iterable[tuple[str, str]] = ()) -> None:
        self.fields: tuple[tuple[str, str], ...] = tuple(
            (str(name), str(value)) for name, value in fields
        )

    def append(self, name: str, value: str) -> FormBody:
        return FormBody(self.fields + ((name, value),))

    def encode(self) -> bytes:
        return form_urlencode(self.fields).encode("ascii")

    def _key(self) -> typing.Any:
        return self.fields

    def __repr__(self) -> str:
        return f"FormBody({list(self.fields)!r})"


def encode_json(value: typing.Any) -> bytes:
    """
    Serialize ``value`` to compact UTF-8 JSON.

    NaN and infinities have no JSON representation and are refused, as are
    circular structures and objects the ``json`` module can't handle.
    """
    try:
        content = json.dumps(
            value,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"Value is not JSON serializable: {exc}") from exc
    return content
