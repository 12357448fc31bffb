"""Turn a site's coordinates into a fixed-size digest."""

from __future__ import annotations

import hashlib

from siteid.identity.value_objects import CoordinateTuple


def fingerprint(coords: CoordinateTuple) -> bytes:
    """Return the 16-byte MD5 digest of the serialized coordinates.

    MD5 is used for spread, not secrecy: equal tuples give equal digests
    in every process, which keeps identifiers stable across builds.
    """
    return hashlib.md5(
        coords.serialize().encode("utf-8"), usedforsecurity=False
    ).digest()
