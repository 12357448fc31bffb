"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so settings, CLI choices and JSON
output work unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class IdFormat(StrEnum):
    """Textual shape of a rendered identifier."""

    HEX16 = "hex16"
    HEX32 = "hex32"
    UUID = "uuid"
    HEX8 = "hex8"
    HTML_ID = "html_id"


class DuplicatePolicy(StrEnum):
    """What grouping does when two sites resolve to the same constant."""

    ERROR = "error"
    LAST_WINS = "last_wins"


class OccurrenceKind(StrEnum):
    """Syntactic position an attribute occurrence was found on."""

    PARAMETER = "parameter"
    PROPERTY = "property"
    FIELD = "field"
    RETURN = "return"


class StageOutcome(StrEnum):
    """Outcome of building one emission unit."""

    COMPLETED = "completed"
    FAILED = "failed"


# ── Fingerprint ──────────────────────────────────────────

DIGEST_SIZE = 16
COORDINATE_SEPARATOR = ":"

# ── Format Codec ─────────────────────────────────────────

HTML_ID_LENGTH = 6
HTML_ID_FIRST_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
HTML_ID_REST_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789-_"
HTML_ID_BIT_MASK = 0x3F

# Bytes of the digest consumed by the fixed-width hex formats
HEX_FORMAT_BYTES: dict[IdFormat, int] = {
    IdFormat.HEX8: 4,
    IdFormat.HEX16: 8,
    IdFormat.HEX32: 16,
}

# Member names and ordinals of the C# UniqueIdFormat enum
CSHARP_FORMAT_NAMES: dict[str, IdFormat] = {
    "Hex16": IdFormat.HEX16,
    "Hex32": IdFormat.HEX32,
    "Guid": IdFormat.UUID,
    "Hex8": IdFormat.HEX8,
    "HtmlId": IdFormat.HTML_ID,
}
CSHARP_FORMAT_ORDINALS: dict[int, IdFormat] = {
    0: IdFormat.HEX16,
    1: IdFormat.HEX32,
    2: IdFormat.UUID,
    3: IdFormat.HEX8,
    4: IdFormat.HTML_ID,
}
CSHARP_FORMAT_ENUM = "UniqueIdFormat"

# ── Emission ─────────────────────────────────────────────

CONSTANT_SUFFIX = "_Id"
DEFAULT_UNIT_SUFFIX = "_UniqueIds"
DEFAULT_OUTPUT_EXTENSION = ".g.cs"
ATTRIBUTE_UNIT_NAME = "UniqueIdAttribute"
INDENT = "    "
AUTO_GENERATED_MARKER = "// <auto-generated/>"


def constant_name(member: str, parameter: str) -> str:
    """Name of the constant generated for one annotated parameter."""
    return f"{member}_{parameter}{CONSTANT_SUFFIX}"


# ── Discovery ────────────────────────────────────────────

BINARY_DETECTION_BUFFER = 8192
