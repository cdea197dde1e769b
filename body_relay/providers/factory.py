"""Content-type driven provider selection."""

from body_relay.core.logger import LogIcon, logger
from body_relay.errors import UnsupportedContentTypeError
from body_relay.models.content_type import ContentType
from body_relay.providers.base import BodyProvider, BodyProviderFactory
from body_relay.providers.multipart import MultipartBodyProvider
from body_relay.providers.raw import RawBodyProvider
from body_relay.providers.string import StringBodyProvider


class ContentTypeBodyProviderFactory(BodyProviderFactory):
    """Picks a body provider from the content type's primary and sub type."""

    def build(self, content_type: ContentType) -> BodyProvider:
        match content_type.primary_type:
            case "audio" | "video" | "image":
                provider: BodyProvider = RawBodyProvider()
            case "multipart":
                provider = MultipartBodyProvider()
            case "application" if content_type.sub_type == "json":
                provider = StringBodyProvider()
            case "application":
                provider = RawBodyProvider()
            case "text":
                provider = StringBodyProvider()
            case _:
                logger.warning("Unsupported content type", icon=LogIcon.FORBIDDEN, content_type=content_type.value)
                raise UnsupportedContentTypeError(content_type.value)

        logger.debug(
            "Body provider selected",
            icon=LogIcon.DETECTION,
            content_type=content_type.mime_type,
            provider=provider.__class__.__name__,
        )
        return provider
