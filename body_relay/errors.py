"""Errors raised while turning a request into a relayable body."""

from typing import Any


class BodyRelayError(Exception):
    """Base exception for body relay failures."""


class UnsupportedContentTypeError(BodyRelayError, ValueError):
    """No body provider is mapped to the given content type."""

    ALLOWED: tuple[str, ...] = (
        "multipart/form-data",
        "application/json",
        "text/plain",
        "application/octet-stream",
        "audio/*",
        "video/*",
        "image/*",
    )

    def __init__(self, content_type: Any) -> None:
        self.content_type = content_type
        super().__init__(
            f"Unsupported content type '{content_type}'. Content types allowed are:"
            " multipart/form-data, application/json, text/plain,"
            " application/octet-stream or any audio, video or image one."
        )


class InvalidRequestShapeError(BodyRelayError, TypeError):
    """The request shape does not match what the selected provider reads."""

    def __init__(self, message: str, *, expected: str | None = None, request: Any = None) -> None:
        self.expected = expected
        self.request = request
        super().__init__(message)


class CharsetNotRegisteredError(BodyRelayError, LookupError):
    """No encoder is registered under the requested charset name."""

    def __init__(self, charset: str | None) -> None:
        self.charset = charset
        super().__init__(f"No encoding registered for charset '{charset}'")
