"""Text encodings and the charset-name registry used to resolve them."""

import codecs

from body_relay.core.logger import LogIcon, logger
from body_relay.errors import CharsetNotRegisteredError


class Encoding:
    """A named text codec able to turn strings into bytes and back."""

    __slots__ = ("codec", "name")

    def __init__(self, name: str, codec: str | None = None) -> None:
        self.name = name.lower()
        # Fails early on codecs Python does not ship
        self.codec = codecs.lookup(codec or name).name

    def encode(self, value: str) -> bytes:
        return value.encode(self.codec)

    def decode(self, data: bytes) -> str:
        return bytes(data).decode(self.codec)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Encoding):
            return NotImplemented
        return self.codec == other.codec

    def __hash__(self) -> int:
        return hash(self.codec)

    def __repr__(self) -> str:
        return f"Encoding({self.name!r})"


UTF8 = Encoding("utf-8")
ASCII = Encoding("us-ascii", "ascii")
LATIN1 = Encoding("iso-8859-1", "latin-1")

# IANA names and aliases
_ENCODINGS: dict[str, Encoding] = {
    **dict.fromkeys(["utf-8", "utf8"], UTF8),
    **dict.fromkeys(
        [
            "ansi_x3.4-1968", "iso-ir-6", "ansi_x3.4-1986", "iso_646.irv:1991",
            "iso646-us", "us-ascii", "us", "ibm367", "cp367", "csascii", "ascii",
        ],
        ASCII,
    ),
    **dict.fromkeys(
        [
            "iso_8859-1:1987", "iso-ir-100", "iso_8859-1", "iso-8859-1",
            "latin1", "l1", "ibm819", "cp819", "csisolatin1",
        ],
        LATIN1,
    ),
}


def register_encoding(encoding: Encoding, *aliases: str) -> None:
    """Register an encoding under its own name and any extra aliases.

    Example:
        register_encoding(Encoding("utf-16", "utf_16"), "utf16")
    """
    for name in (encoding.name, *aliases):
        _ENCODINGS[name.lower()] = encoding
    logger.debug(f"Registered encoding: {encoding.name}", icon=LogIcon.ADAPTER, aliases=aliases)


def find_encoding(name: str | None) -> Encoding | None:
    """Look up an encoding by charset name, None when unknown."""
    if not name:
        return None
    return _ENCODINGS.get(name.strip().lower())


def get_encoding(name: str | None) -> Encoding:
    """Get an encoding by charset name (case-insensitive).

    Raises:
        CharsetNotRegisteredError: If no encoding is registered under ``name``
    """
    encoding = find_encoding(name)
    if encoding is None:
        logger.warning("Charset not registered", icon=LogIcon.VALIDATION, charset=name)
        raise CharsetNotRegisteredError(name)
    return encoding


def list_encodings() -> list[str]:
    """List all registered charset names."""
    return sorted(_ENCODINGS.keys())
