"""Body provider interfaces."""

from abc import ABC, abstractmethod

from body_relay.core.logger import LogIcon, logger
from body_relay.errors import InvalidRequestShapeError
from body_relay.models.content_type import ContentType
from body_relay.models.encoding import Encoding
from body_relay.models.request import BaseRequest, RequestKind


class BodyProvider(ABC):
    """Strategy extracting a request's body and the encoding it is read with."""

    @abstractmethod
    async def get_body(self, request: BaseRequest) -> str | bytes:
        """Return the fully materialized body."""

    @abstractmethod
    def get_encoding(self, request: BaseRequest) -> Encoding:
        """Return the text encoding associated with the body."""

    def _reject(self, request: BaseRequest, expected: RequestKind, message: str) -> InvalidRequestShapeError:
        logger.warning(
            "Request shape rejected",
            icon=LogIcon.FORBIDDEN,
            provider=self.__class__.__name__,
            expected=expected,
            got=getattr(request, "kind", type(request).__name__),
        )
        return InvalidRequestShapeError(message, expected=expected, request=request)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class BodyProviderFactory(ABC):
    """Maps a content type to the provider able to read that body."""

    @abstractmethod
    def build(self, content_type: ContentType) -> BodyProvider:
        """Return the provider for ``content_type``."""
