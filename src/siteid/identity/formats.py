"""Render a digest into one of the supported identifier shapes."""

from __future__ import annotations

import re
import uuid

from siteid.constants import (
    CSHARP_FORMAT_NAMES,
    CSHARP_FORMAT_ORDINALS,
    DIGEST_SIZE,
    HEX_FORMAT_BYTES,
    HTML_ID_BIT_MASK,
    HTML_ID_FIRST_ALPHABET,
    HTML_ID_LENGTH,
    HTML_ID_REST_ALPHABET,
    IdFormat,
)
from siteid.errors import DigestSizeError, UnknownFormatError
from siteid.identity.fingerprint import fingerprint
from siteid.identity.value_objects import CoordinateTuple

# "(UniqueIdFormat)2" -> "2"
_CAST_PREFIX = re.compile(r"^\(\s*[\w.:]+\s*\)\s*")


def render(digest: bytes, fmt: IdFormat | str = IdFormat.HEX16) -> str:
    """Render a 16-byte digest in the requested format.

    Raises :class:`DigestSizeError` for anything but a 16-byte digest;
    other sizes are a caller bug and are never truncated.
    ``fmt`` accepts any spelling :func:`parse_format` does.
    """
    if len(digest) != DIGEST_SIZE:
        raise DigestSizeError(DIGEST_SIZE, len(digest))

    fmt = parse_format(fmt)
    if fmt in HEX_FORMAT_BYTES:
        return digest[: HEX_FORMAT_BYTES[fmt]].hex()
    if fmt == IdFormat.UUID:
        return encode_uuid(digest)
    return encode_html_id(digest)


def encode_uuid(data: bytes) -> str:
    """Dashed GUID form of 16 bytes, no version or variant fixups.

    Uses the .NET ``Guid(byte[])`` layout: the first three groups are
    read little-endian, the last two as-is.
    """
    if len(data) < DIGEST_SIZE:
        raise DigestSizeError(DIGEST_SIZE, len(data))
    return str(uuid.UUID(bytes_le=bytes(data[:DIGEST_SIZE])))


def encode_html_id(data: bytes, length: int = HTML_ID_LENGTH) -> str:
    """Encode bytes as a short id that is valid as an HTML element id.

    The first character is always a lowercase letter taken from
    ``data[0]``. Each following character uses the low 6 bits of every
    other byte starting at ``data[1]``, so neighbouring bytes never feed
    neighbouring characters. Stops early when ``data`` runs out.
    """
    if not data:
        raise DigestSizeError(1, 0)

    chars = [HTML_ID_FIRST_ALPHABET[data[0] % len(HTML_ID_FIRST_ALPHABET)]]
    for position in range(1, length):
        offset = 1 + (position - 1) * 2
        if offset >= len(data):
            break
        value = data[offset] & HTML_ID_BIT_MASK
        chars.append(HTML_ID_REST_ALPHABET[value % len(HTML_ID_REST_ALPHABET)])
    return "".join(chars)


def identify(coords: CoordinateTuple, fmt: IdFormat = IdFormat.HEX16) -> str:
    """Fingerprint and render in one step."""
    return render(fingerprint(coords), fmt)


def parse_format(value: IdFormat | str | int) -> IdFormat:
    """Resolve a format selector from any of its spellings.

    Accepts enum members, their values (``"hex32"``), C# enum member
    names, optionally qualified (``"UniqueIdFormat.Guid"``), and C#
    ordinals, optionally cast (``"(UniqueIdFormat)4"``).
    """
    if isinstance(value, IdFormat):
        return value
    if isinstance(value, bool):
        raise UnknownFormatError(f"not a format: {value!r}")
    if isinstance(value, int):
        return _from_ordinal(value)

    text = _CAST_PREFIX.sub("", str(value).strip())
    if text.isdigit():
        return _from_ordinal(int(text))

    try:
        return IdFormat(text)
    except ValueError:
        pass

    member = re.split(r"\.|::", text)[-1].strip()
    if member in CSHARP_FORMAT_NAMES:
        return CSHARP_FORMAT_NAMES[member]
    try:
        return IdFormat[member.upper()]
    except KeyError:
        raise UnknownFormatError(f"unknown id format: {value!r}") from None


def _from_ordinal(ordinal: int) -> IdFormat:
    try:
        return CSHARP_FORMAT_ORDINALS[ordinal]
    except KeyError:
        raise UnknownFormatError(
            f"unknown id format ordinal: {ordinal}"
        ) from None
