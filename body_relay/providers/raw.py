"""Provider relaying the body as exact bytes."""

from body_relay.models.encoding import Encoding
from body_relay.models.request import BaseRequest, Request, RequestKind
from body_relay.providers.base import BodyProvider

_SHAPE_ERROR = "Provided request is not a valid one with a Raw bytes body"


class RawBodyProvider(BodyProvider):
    """Reads single-body requests as raw bytes."""

    async def get_body(self, request: BaseRequest) -> bytes:
        match request:
            case Request():
                return request.body_bytes
            case _:
                raise self._reject(request, RequestKind.SINGLE, _SHAPE_ERROR)

    def get_encoding(self, request: BaseRequest) -> Encoding:
        match request:
            case Request():
                return request.encoding
            case _:
                raise self._reject(request, RequestKind.SINGLE, _SHAPE_ERROR)
