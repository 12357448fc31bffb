"""Site identity: fingerprinting and identifier formats."""

from siteid.identity.fingerprint import fingerprint
from siteid.identity.formats import (
    encode_html_id,
    encode_uuid,
    identify,
    parse_format,
    render,
)
from siteid.identity.value_objects import (
    CoordinateTuple,
    DeclarationKey,
    TypeFrame,
)

__all__ = [
    "CoordinateTuple",
    "DeclarationKey",
    "TypeFrame",
    "encode_html_id",
    "encode_uuid",
    "fingerprint",
    "identify",
    "parse_format",
    "render",
]
