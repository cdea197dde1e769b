"""Tests for encodings and the charset registry."""

import pytest

from body_relay.errors import CharsetNotRegisteredError
from body_relay.models import encoding as encoding_module
from body_relay.models.encoding import (
    ASCII,
    LATIN1,
    UTF8,
    Encoding,
    find_encoding,
    get_encoding,
    list_encodings,
    register_encoding,
)


@pytest.fixture
def isolated_registry(monkeypatch):
    """Give each test its own copy of the charset registry."""
    monkeypatch.setattr(encoding_module, "_ENCODINGS", dict(encoding_module._ENCODINGS))


class TestGetEncoding:
    """Tests for charset lookup."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("utf-8", UTF8),
            ("UTF8", UTF8),
            ("us-ascii", ASCII),
            ("csASCII", ASCII),
            ("iso-8859-1", LATIN1),
            ("latin1", LATIN1),
            (" l1 ", LATIN1),
        ],
    )
    def test_known_names_and_aliases(self, name: str, expected: Encoding) -> None:
        """Verify IANA names and aliases resolve case-insensitively."""
        assert get_encoding(name) is expected

    def test_unknown_charset_raises(self) -> None:
        """Verify unknown charsets raise a typed error naming the charset."""
        with pytest.raises(CharsetNotRegisteredError) as exc_info:
            get_encoding("klingon-8")

        assert exc_info.value.charset == "klingon-8"
        assert isinstance(exc_info.value, LookupError)

    def test_missing_charset_raises(self) -> None:
        """Verify None is not silently treated as a charset."""
        with pytest.raises(CharsetNotRegisteredError):
            get_encoding(None)

    def test_find_returns_none_for_unknown(self) -> None:
        """Verify find_encoding never raises."""
        assert find_encoding("klingon-8") is None
        assert find_encoding(None) is None


class TestEncoding:
    """Tests for Encoding objects."""

    def test_encode_decode(self) -> None:
        """Verify text survives encoding with a matching codec."""
        assert LATIN1.encode("café") == b"caf\xe9"
        assert LATIN1.decode(b"caf\xe9") == "café"
        assert UTF8.encode("café") == "café".encode()

    def test_ascii_rejects_non_ascii(self) -> None:
        """Verify codec errors propagate."""
        with pytest.raises(UnicodeEncodeError):
            ASCII.encode("café")

    def test_unknown_codec_fails_on_creation(self) -> None:
        """Verify codecs Python lacks are rejected up front."""
        with pytest.raises(LookupError):
            Encoding("not-a-codec")

    def test_equality_by_codec(self) -> None:
        """Verify encodings compare by underlying codec."""
        assert Encoding("utf8") == UTF8
        assert Encoding("latin1") != UTF8


class TestRegisterEncoding:
    """Tests for registry extension."""

    def test_register_with_aliases(self, isolated_registry) -> None:
        """Verify registered encodings resolve by name and alias."""
        utf16 = Encoding("utf-16", "utf_16")
        register_encoding(utf16, "UTF16")

        assert get_encoding("utf-16") is utf16
        assert get_encoding("utf16") is utf16
        assert "utf16" in list_encodings()

    def test_list_encodings_sorted(self) -> None:
        """Verify listing is sorted and includes the defaults."""
        names = list_encodings()

        assert names == sorted(names)
        assert {"utf-8", "us-ascii", "iso-8859-1"} <= set(names)
