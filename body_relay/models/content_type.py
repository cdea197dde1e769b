"""Structured media type used to pick body providers and label multipart parts."""

import re
from email.message import Message
from email.utils import collapse_rfc2231_value, quote
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def _format_parameter(key: str, param: str) -> str:
    """Render ``key=param``, quoting values that are not a bare token."""
    if _TOKEN.fullmatch(param):
        return f"{key}={param}"
    return f'{key}="{quote(param)}"'


class ContentType(BaseModel):
    """Immutable ``primary/sub; charset=...; key=value`` media type."""

    model_config = ConfigDict(frozen=True)

    primary_type: str = Field(min_length=1)
    sub_type: str = Field(min_length=1)
    charset: str | None = None
    parameters: tuple[tuple[str, str], ...] = ()

    BINARY: ClassVar["ContentType"]
    TEXT: ClassVar["ContentType"]
    JSON: ClassVar["ContentType"]
    HTML: ClassVar["ContentType"]

    @classmethod
    def parse(cls, value: str) -> "ContentType":
        """Parse a Content-Type header value.

        Type, subtype and parameter names are lower-cased, quoted parameter
        values are unquoted.

        Raises:
            ValueError: If the value has no ``primary/sub`` part
        """
        message = Message()
        message["content-type"] = value
        (media_type, _), *raw_params = message.get_params(unquote=True) or [("", "")]
        primary_type, sep, sub_type = media_type.strip().partition("/")
        if not sep:
            raise ValueError(f"Invalid content type: {value!r}")

        charset: str | None = None
        parameters: list[tuple[str, str]] = []
        for key, param in raw_params:
            if not key:
                continue
            if isinstance(param, tuple):
                param = collapse_rfc2231_value(param)
            if key == "charset":
                charset = param.lower()
            else:
                parameters.append((key, param))

        return cls(
            primary_type=primary_type.strip().lower(),
            sub_type=sub_type.strip().lower(),
            charset=charset,
            parameters=tuple(parameters),
        )

    @property
    def mime_type(self) -> str:
        return f"{self.primary_type}/{self.sub_type}"

    @property
    def value(self) -> str:
        """Canonical header string."""
        parts = [self.mime_type]
        if self.charset is not None:
            parts.append(_format_parameter("charset", self.charset))
        parts.extend(_format_parameter(key, param) for key, param in self.parameters)
        return "; ".join(parts)

    def get_parameter(self, name: str) -> str | None:
        if name.lower() == "charset":
            return self.charset
        return dict(self.parameters).get(name.lower())

    def with_charset(self, charset: str | None) -> "ContentType":
        return self.model_copy(update={"charset": charset})

    def __str__(self) -> str:
        return self.value


ContentType.BINARY = ContentType(primary_type="application", sub_type="octet-stream")
ContentType.TEXT = ContentType(primary_type="text", sub_type="plain", charset="utf-8")
ContentType.JSON = ContentType(primary_type="application", sub_type="json", charset="utf-8")
ContentType.HTML = ContentType(primary_type="text", sub_type="html", charset="utf-8")
