"""Provider serializing multipart requests into a JSON array of messages."""

import asyncio

import orjson

from body_relay.core.logger import LogIcon, logger
from body_relay.models.content_type import ContentType
from body_relay.models.encoding import UTF8, Encoding
from body_relay.models.message import MultipartMessage
from body_relay.models.request import BaseRequest, MultipartFile, MultipartRequest, RequestKind
from body_relay.providers.base import BodyProvider


async def read_part(part: MultipartFile) -> MultipartMessage:
    """Finalize a file part and read it into a message."""
    data = await part.finalize().to_bytes()
    content_type = ContentType.parse(part.content_type.mime_type)
    return MultipartMessage.from_bytes(part.field, data, content_type=content_type)


class MultipartBodyProvider(BodyProvider):
    """Reads every part concurrently and emits them, in request order, as one JSON string.

    Plain form fields come first as ``text/plain; charset=utf-8`` messages,
    followed by the file parts.
    """

    async def get_body(self, request: BaseRequest) -> str:
        match request:
            case MultipartRequest():
                messages = await self.get_messages(request)
                logger.info("Multipart body serialized", icon=LogIcon.UPLOAD, parts=len(messages))
                return orjson.dumps([message.to_json() for message in messages]).decode()
            case _:
                raise self._reject(request, RequestKind.MULTIPART, "Provided request is not a valid Multipart one")

    async def get_messages(self, request: MultipartRequest) -> list[MultipartMessage]:
        """Build the ordered message list; gather keeps source order whatever finishes first."""
        fields = [MultipartMessage.from_string(name, value) for name, value in request.fields.items()]
        files = await asyncio.gather(*(read_part(part) for part in request.files))
        return [*fields, *files]

    def get_encoding(self, request: BaseRequest) -> Encoding:
        return UTF8
