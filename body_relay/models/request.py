"""Outgoing request shapes handed to body providers.

Three shapes exist, tagged by ``RequestKind``:

- ``Request``: a single materialized body with a declared text encoding.
- ``MultipartRequest``: plain form fields plus a sequence of ``MultipartFile`` parts.
- ``StreamedRequest``: a body only available as an async byte stream.
"""

import uuid
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Mapping
from enum import StrEnum
from typing import ClassVar

from body_relay.core.settings import settings as st
from body_relay.errors import InvalidRequestShapeError
from body_relay.models.content_type import ContentType
from body_relay.models.encoding import Encoding, get_encoding


class RequestKind(StrEnum):
    """Request body shape classification."""

    SINGLE = "single"
    MULTIPART = "multipart"
    STREAMED = "streamed"


class ByteStream:
    """Async stream of byte chunks that can be collected into one payload."""

    __slots__ = ("_source",)

    def __init__(self, source: AsyncIterable[bytes]) -> None:
        self._source = source

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteStream":
        async def _single() -> AsyncIterator[bytes]:
            yield data

        return cls(_single())

    def __aiter__(self) -> AsyncIterator[bytes]:
        return aiter(self._source)

    async def to_bytes(self) -> bytes:
        """Read the whole stream."""
        chunks = bytearray()
        async for chunk in self._source:
            chunks.extend(chunk)
        return bytes(chunks)


class MultipartFile:
    """One file part of a multipart request, readable exactly once."""

    __slots__ = ("_finalized", "_stream", "content_type", "field", "filename", "length")

    def __init__(
        self,
        field: str,
        stream: AsyncIterable[bytes],
        length: int,
        *,
        filename: str | None = None,
        content_type: ContentType | None = None,
    ) -> None:
        self.field = field
        self.length = length
        self.filename = filename
        self.content_type = content_type or ContentType.BINARY
        self._stream = stream
        self._finalized = False

    @classmethod
    def from_bytes(
        cls,
        field: str,
        value: bytes,
        *,
        filename: str | None = None,
        content_type: ContentType | None = None,
    ) -> "MultipartFile":
        data = bytes(value)
        return cls(field, ByteStream.from_bytes(data), len(data), filename=filename, content_type=content_type)

    @classmethod
    def from_string(
        cls,
        field: str,
        value: str,
        *,
        filename: str | None = None,
        content_type: ContentType | None = None,
    ) -> "MultipartFile":
        """Create a part from text, ``text/plain; charset=utf-8`` unless told otherwise."""
        content_type = content_type or ContentType.TEXT
        encoding = get_encoding(content_type.charset or "utf-8")
        return cls.from_bytes(field, encoding.encode(value), filename=filename, content_type=content_type)

    @classmethod
    def from_stream(
        cls,
        field: str,
        stream: AsyncIterable[bytes],
        length: int,
        *,
        filename: str | None = None,
        content_type: ContentType | None = None,
    ) -> "MultipartFile":
        return cls(field, stream, length, filename=filename, content_type=content_type)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def finalize(self) -> ByteStream:
        """Hand over the part's byte stream. Can only be called once."""
        if self._finalized:
            raise InvalidRequestShapeError(
                f"Multipart file '{self.field}' can only be finalized once", expected="unfinalized"
            )
        self._finalized = True
        stream = self._stream
        return stream if isinstance(stream, ByteStream) else ByteStream(stream)

    def __repr__(self) -> str:
        return f"MultipartFile(field={self.field!r}, length={self.length}, content_type={self.content_type.value!r})"


class BaseRequest:
    """Common request surface: method, url and case-insensitive headers."""

    kind: ClassVar[RequestKind]

    def __init__(self, method: str, url: str, headers: Mapping[str, str] | None = None) -> None:
        self.method = method.upper()
        self.url = url
        self.headers: dict[str, str] = {k.lower(): v for k, v in (headers or {}).items()}

    @property
    def content_type(self) -> ContentType | None:
        """Parsed Content-Type header, None when absent."""
        raw = self.headers.get("content-type")
        return ContentType.parse(raw) if raw else None

    @content_type.setter
    def content_type(self, value: ContentType) -> None:
        self.headers["content-type"] = value.value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.method} {self.url})"


class Request(BaseRequest):
    """Request carrying one fully materialized body."""

    kind = RequestKind.SINGLE

    def __init__(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        body: str | bytes | None = None,
    ) -> None:
        super().__init__(method, url, headers)
        self._body_bytes = b""
        self._encoding: Encoding | None = None
        match body:
            case str():
                self.body = body
            case bytes() | bytearray():
                self.body_bytes = body

    @property
    def encoding(self) -> Encoding:
        """Encoding named by the content type charset, or the request/configured default.

        Raises:
            CharsetNotRegisteredError: If the declared charset is unknown
        """
        content_type = self.content_type
        if content_type is None or content_type.charset is None:
            return self._encoding or get_encoding(st.DEFAULT_CHARSET)
        return get_encoding(content_type.charset)

    @encoding.setter
    def encoding(self, value: Encoding) -> None:
        self._encoding = value
        content_type = self.content_type
        if content_type is not None:
            self.content_type = content_type.with_charset(value.name)

    @property
    def body_bytes(self) -> bytes:
        return self._body_bytes

    @body_bytes.setter
    def body_bytes(self, value: bytes) -> None:
        self._body_bytes = bytes(value)
        self.headers["content-length"] = str(len(self._body_bytes))

    @property
    def body(self) -> str:
        return self.encoding.decode(self._body_bytes)

    @body.setter
    def body(self, value: str) -> None:
        encoding = self.encoding
        self.body_bytes = encoding.encode(value)
        content_type = self.content_type
        if content_type is None:
            self.content_type = ContentType.TEXT.with_charset(encoding.name)
        elif content_type.charset is None:
            self.content_type = content_type.with_charset(encoding.name)

    @property
    def content_length(self) -> int:
        return len(self._body_bytes)


class MultipartRequest(BaseRequest):
    """Request composed of plain form fields and file parts."""

    kind = RequestKind.MULTIPART

    def __init__(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        fields: Mapping[str, str] | None = None,
        files: Iterable[MultipartFile] | None = None,
    ) -> None:
        super().__init__(method, url, headers)
        self.fields: dict[str, str] = dict(fields or {})
        self.files: list[MultipartFile] = list(files or [])
        self.boundary = f"body-relay-boundary-{uuid.uuid4().hex}"

    @property
    def content_type(self) -> ContentType:
        declared = super().content_type
        if declared is not None:
            return declared
        return ContentType(primary_type="multipart", sub_type="form-data", parameters=(("boundary", self.boundary),))

    @content_type.setter
    def content_type(self, value: ContentType) -> None:
        self.headers["content-type"] = value.value


class StreamedRequest(BaseRequest):
    """Request whose body is only available as a byte stream."""

    kind = RequestKind.STREAMED

    def __init__(
        self,
        method: str,
        url: str,
        stream: AsyncIterable[bytes],
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(method, url, headers)
        self.stream = stream if isinstance(stream, ByteStream) else ByteStream(stream)
