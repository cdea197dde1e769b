"""MultipartMessage: one multipart field/file prepared for relay serialization."""

from typing import Any, Protocol, TypeVar

import orjson

from body_relay.models.content_type import ContentType
from body_relay.models.encoding import get_encoding

T = TypeVar("T")


class BytesCodec(Protocol[T]):
    """Anything able to encode a value into bytes."""

    def encode(self, value: T) -> bytes: ...


class MultipartMessage:
    """A named byte payload with its content type.

    ``length`` is derived from ``data`` so the two never disagree. All
    factory classmethods end in ``from_bytes``.
    """

    __slots__ = ("content_type", "data", "name")

    def __init__(self, name: str, data: bytes, *, content_type: ContentType | None = None) -> None:
        self.name = name
        self.data = bytes(data)
        self.content_type = content_type or ContentType.BINARY

    @property
    def length(self) -> int:
        """Size of the payload in bytes."""
        return len(self.data)

    @classmethod
    def from_bytes(cls, field: str, raw: bytes, *, content_type: ContentType | None = None) -> "MultipartMessage":
        """Create a message from raw bytes, ``application/octet-stream`` by default."""
        return cls(field, raw, content_type=content_type or ContentType.BINARY)

    @classmethod
    def from_string(cls, field: str, value: str, *, content_type: ContentType | None = None) -> "MultipartMessage":
        """Create a message from text, ``text/plain; charset=utf-8`` by default.

        The text is encoded with the content type charset; a content type
        without charset is encoded as UTF-8.

        Raises:
            CharsetNotRegisteredError: If the charset has no registered encoding
        """
        content_type = content_type or ContentType.TEXT
        encoding = get_encoding(content_type.charset or "utf-8")
        return cls.from_bytes(field, encoding.encode(value), content_type=content_type)

    @classmethod
    def from_json(cls, field: str, value: Any, *, content_type: ContentType | None = None) -> "MultipartMessage":
        """Create a message from a JSON-serializable value, ``application/json`` by default."""
        encoded = orjson.dumps(value).decode()
        return cls.from_string(field, encoded, content_type=content_type or ContentType.JSON)

    @classmethod
    def from_codec(
        cls,
        field: str,
        value: T,
        codec: BytesCodec[T],
        *,
        content_type: ContentType | None = None,
    ) -> "MultipartMessage":
        """Create a message from any value using a caller supplied bytes codec."""
        return cls.from_bytes(field, bytes(codec.encode(value)), content_type=content_type)

    def to_json(self) -> dict[str, Any]:
        """JSON-ready mapping, bytes rendered as an integer array."""
        return {
            "name": self.name,
            "length": self.length,
            "contentType": self.content_type.value,
            "data": list(self.data),
        }

    def __repr__(self) -> str:
        return f"MultipartMessage(name={self.name!r}, length={self.length}, content_type={self.content_type.value!r})"
