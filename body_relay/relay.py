"""One-call body extraction: pick the provider from the request and read it."""

from pydantic import BaseModel, ConfigDict

from body_relay.core.logger import LogIcon, logger
from body_relay.models.content_type import ContentType
from body_relay.models.encoding import Encoding
from body_relay.models.request import BaseRequest
from body_relay.providers.base import BodyProviderFactory
from body_relay.providers.factory import ContentTypeBodyProviderFactory


class RelayBody(BaseModel):
    """Serialized body ready to hand to the relay transport."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    body: str | bytes
    encoding: Encoding
    content_type: ContentType

    @property
    def is_text(self) -> bool:
        return isinstance(self.body, str)

    def as_bytes(self) -> bytes:
        """Body as bytes, text encoded with ``encoding``."""
        if isinstance(self.body, str):
            return self.encoding.encode(self.body)
        return self.body


async def extract_body(request: BaseRequest, factory: BodyProviderFactory | None = None) -> RelayBody:
    """Extract a request body through the provider matching its content type.

    Requests without a Content-Type header are read as ``application/octet-stream``.

    Raises:
        UnsupportedContentTypeError: If no provider handles the content type
        InvalidRequestShapeError: If the request shape does not fit the provider
    """
    content_type = request.content_type or ContentType.BINARY
    provider = (factory or ContentTypeBodyProviderFactory()).build(content_type)

    body = await provider.get_body(request)
    encoding = provider.get_encoding(request)

    logger.info(
        "Request body extracted",
        icon=LogIcon.PROCESSING,
        method=request.method,
        content_type=content_type.mime_type,
        size=len(body),
    )
    return RelayBody(body=body, encoding=encoding, content_type=content_type)
