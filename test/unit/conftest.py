"""Test fixtures for body-relay unit tests."""

import asyncio
from collections.abc import AsyncIterator

import pytest

from body_relay.models.content_type import ContentType
from body_relay.models.request import MultipartFile, MultipartRequest, Request


# -----------------------------------------------------------------------------
# Stream helpers
# -----------------------------------------------------------------------------


async def _delayed_stream(
    data: bytes,
    delay: float,
    completed: list[str] | None = None,
    label: str = "",
    chunk_size: int = 2,
) -> AsyncIterator[bytes]:
    """Yield ``data`` in chunks after sleeping, recording completion order."""
    await asyncio.sleep(delay)
    for start in range(0, len(data), chunk_size):
        yield data[start : start + chunk_size]
    if completed is not None:
        completed.append(label)


@pytest.fixture
def make_stream():
    """Factory fixture to create delayed async byte streams."""
    return _delayed_stream


# -----------------------------------------------------------------------------
# Request fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def make_request():
    """Factory fixture to create single-body requests."""

    def _make(body: str | bytes | None = None, content_type: str | None = "text/plain; charset=utf-8") -> Request:
        headers = {"Content-Type": content_type} if content_type else {}
        return Request("POST", "https://relay.test/upload", headers, body=body)

    return _make


@pytest.fixture
def make_multipart_request():
    """Factory fixture to create multipart requests from (field, bytes, mime) tuples."""

    def _make(
        parts: list[tuple[str, bytes, str]] | None = None,
        fields: dict[str, str] | None = None,
    ) -> MultipartRequest:
        files = [
            MultipartFile.from_bytes(field, data, content_type=ContentType.parse(mime))
            for field, data, mime in (parts or [])
        ]
        return MultipartRequest("POST", "https://relay.test/form", fields=fields, files=files)

    return _make
