"""Provider relaying the body as decoded text."""

from body_relay.models.encoding import Encoding
from body_relay.models.request import BaseRequest, Request, RequestKind
from body_relay.providers.base import BodyProvider

_SHAPE_ERROR = "Provided request is not a valid one with a String body"


class StringBodyProvider(BodyProvider):
    """Reads single-body requests as text decoded with their declared encoding."""

    async def get_body(self, request: BaseRequest) -> str:
        match request:
            case Request():
                return request.body
            case _:
                raise self._reject(request, RequestKind.SINGLE, _SHAPE_ERROR)

    def get_encoding(self, request: BaseRequest) -> Encoding:
        match request:
            case Request():
                return request.encoding
            case _:
                raise self._reject(request, RequestKind.SINGLE, _SHAPE_ERROR)
