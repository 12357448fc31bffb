"""Tests for digest rendering and format parsing."""

from __future__ import annotations

import hashlib
import re

import pytest

from siteid.constants import IdFormat
from siteid.errors import DigestSizeError, SiteIdError, UnknownFormatError
from siteid.identity.fingerprint import fingerprint
from siteid.identity.formats import (
    encode_html_id,
    encode_uuid,
    identify,
    parse_format,
    render,
)
from siteid.identity.value_objects import CoordinateTuple

# MD5 of the empty string
EMPTY_MD5 = bytes.fromhex("d41d8cd98f00b204e9800998ecf8427e")

SHAPES = {
    IdFormat.HEX16: re.compile(r"^[a-f0-9]{16}$"),
    IdFormat.HEX32: re.compile(r"^[a-f0-9]{32}$"),
    IdFormat.UUID: re.compile(
        r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$"
    ),
    IdFormat.HEX8: re.compile(r"^[a-f0-9]{8}$"),
    IdFormat.HTML_ID: re.compile(r"^[a-z][a-z0-9\-_]{5}$"),
}


def _sample_digests() -> list[bytes]:
    digests = [EMPTY_MD5, bytes(16), b"\xff" * 16, bytes(range(16))]
    digests.extend(
        hashlib.md5(f"sample-{i}".encode()).digest() for i in range(200)
    )
    return digests


class TestKnownVectors:
    def test_hex16(self) -> None:
        assert render(EMPTY_MD5, IdFormat.HEX16) == "d41d8cd98f00b204"

    def test_hex32(self) -> None:
        assert (
            render(EMPTY_MD5, IdFormat.HEX32)
            == "d41d8cd98f00b204e9800998ecf8427e"
        )

    def test_hex8(self) -> None:
        assert render(EMPTY_MD5, IdFormat.HEX8) == "d41d8cd9"

    def test_uuid_uses_mixed_endian_guid_layout(self) -> None:
        assert (
            render(EMPTY_MD5, IdFormat.UUID)
            == "d98c1dd4-008f-04b2-e980-0998ecf8427e"
        )

    def test_uuid_has_no_version_fixup(self) -> None:
        assert encode_uuid(bytes(16)) == "00000000-0000-0000-0000-000000000000"

    def test_html_id(self) -> None:
        assert render(EMPTY_MD5, IdFormat.HTML_ID) == "e3zaea"

    def test_html_id_all_zero(self) -> None:
        assert render(bytes(16), IdFormat.HTML_ID) == "aaaaaa"

    def test_html_id_all_ones(self) -> None:
        assert render(b"\xff" * 16, IdFormat.HTML_ID) == "vzzzzz"

    def test_default_format_is_hex16(self) -> None:
        assert render(EMPTY_MD5) == render(EMPTY_MD5, IdFormat.HEX16)


class TestShapes:
    @pytest.mark.parametrize("fmt", list(IdFormat))
    def test_every_format_matches_its_shape(self, fmt: IdFormat) -> None:
        for digest in _sample_digests():
            assert SHAPES[fmt].match(render(digest, fmt)), (digest, fmt)

    def test_hex_formats_are_prefixes_of_hex32(self) -> None:
        for digest in _sample_digests():
            full = render(digest, IdFormat.HEX32)
            assert full.startswith(render(digest, IdFormat.HEX16))
            assert full.startswith(render(digest, IdFormat.HEX8))

    def test_html_id_ignores_even_bytes_after_first(self) -> None:
        base = bytearray(EMPTY_MD5)
        changed = bytearray(base)
        for offset in (2, 4, 6, 8, 10, 11, 12, 13, 14, 15):
            changed[offset] ^= 0xFF
        assert encode_html_id(bytes(base)) == encode_html_id(bytes(changed))

    def test_html_id_reads_low_six_bits(self) -> None:
        data = bytearray(16)
        data[1] = 0b1100_0001
        assert encode_html_id(bytes(data))[1] == "b"


class TestDigestSize:
    @pytest.mark.parametrize("fmt", list(IdFormat))
    def test_render_rejects_short_digest(self, fmt: IdFormat) -> None:
        with pytest.raises(DigestSizeError) as exc_info:
            render(b"\x01" * 15, fmt)
        assert exc_info.value.required == 16
        assert exc_info.value.actual == 15

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            render(b"", IdFormat.HEX8)

    def test_encode_uuid_rejects_short_input(self) -> None:
        with pytest.raises(DigestSizeError):
            encode_uuid(b"\x00" * 8)

    def test_html_id_stops_early_when_bytes_run_out(self) -> None:
        assert encode_html_id(b"\x00\x00\x00\x00") == "aaa"
        assert encode_html_id(b"\x01") == "b"

    def test_html_id_rejects_empty_input(self) -> None:
        with pytest.raises(DigestSizeError):
            encode_html_id(b"")

    @pytest.mark.parametrize("fmt", list(IdFormat))
    def test_render_rejects_long_digest(self, fmt: IdFormat) -> None:
        with pytest.raises(DigestSizeError) as exc_info:
            render(EMPTY_MD5 + b"\x00" * 4, fmt)
        assert exc_info.value.actual == 20


class TestRenderFormatArgument:
    def test_accepts_format_spellings(self) -> None:
        assert render(EMPTY_MD5, "hex8") == "d41d8cd9"
        assert render(EMPTY_MD5, "UniqueIdFormat.Guid") == (
            "d98c1dd4-008f-04b2-e980-0998ecf8427e"
        )

    def test_unknown_format_string(self) -> None:
        with pytest.raises(UnknownFormatError, match="hex64"):
            render(EMPTY_MD5, "hex64")


class TestIdentify:
    def test_identify_equals_render_of_fingerprint(self) -> None:
        coords = CoordinateTuple("a.cs", "Get", "id", 3, 7)
        for fmt in IdFormat:
            assert identify(coords, fmt) == render(fingerprint(coords), fmt)

    def test_same_member_different_parameters_differ(self) -> None:
        a = CoordinateTuple("a.cs", "Pair", "first", 6, 30)
        b = CoordinateTuple("a.cs", "Pair", "second", 6, 30)
        for fmt in IdFormat:
            assert identify(a, fmt) != identify(b, fmt)

    def test_same_line_different_columns_differ(self) -> None:
        a = CoordinateTuple("a.cs", "Pair", "x", 6, 30)
        b = CoordinateTuple("a.cs", "Pair", "x", 6, 62)
        assert identify(a) != identify(b)

    def test_fifty_html_ids_are_distinct(self) -> None:
        ids = [
            identify(
                CoordinateTuple("src/Page.cs", f"Section{i}", "id", i, 4),
                IdFormat.HTML_ID,
            )
            for i in range(50)
        ]
        assert all(SHAPES[IdFormat.HTML_ID].match(v) for v in ids)
        assert all("a" <= v[0] <= "z" for v in ids)
        assert len(set(ids)) == 50


class TestParseFormat:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (IdFormat.HEX8, IdFormat.HEX8),
            ("hex16", IdFormat.HEX16),
            ("hex32", IdFormat.HEX32),
            ("uuid", IdFormat.UUID),
            ("html_id", IdFormat.HTML_ID),
            ("HTML_ID", IdFormat.HTML_ID),
            ("Guid", IdFormat.UUID),
            ("HtmlId", IdFormat.HTML_ID),
            ("UniqueIdFormat.Hex8", IdFormat.HEX8),
            ("Praefixum.UniqueIdFormat.Hex32", IdFormat.HEX32),
            ("global::Praefixum.UniqueIdFormat.Guid", IdFormat.UUID),
            (" UniqueIdFormat.HtmlId ", IdFormat.HTML_ID),
            (0, IdFormat.HEX16),
            (4, IdFormat.HTML_ID),
            ("2", IdFormat.UUID),
            ("(UniqueIdFormat)3", IdFormat.HEX8),
            ("(Praefixum.UniqueIdFormat) 1", IdFormat.HEX32),
        ],
    )
    def test_spellings(
        self, value: IdFormat | str | int, expected: IdFormat
    ) -> None:
        assert parse_format(value) == expected

    @pytest.mark.parametrize(
        "value", ["hex64", "", "UniqueIdFormat.Base64", 5, -1, "(X)9", True]
    )
    def test_unknown_values_raise(self, value: str | int) -> None:
        with pytest.raises(UnknownFormatError):
            parse_format(value)

    def test_unknown_format_is_a_siteid_error(self) -> None:
        with pytest.raises(SiteIdError):
            parse_format("nope")
