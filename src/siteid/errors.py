"""Exception hierarchy for identifier generation.

Everything raised on purpose by siteid derives from :class:`SiteIdError`,
so the runner can isolate a failing declaration without masking
unrelated bugs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from siteid.identity.value_objects import CoordinateTuple


class SiteIdError(Exception):
    """Base class for all siteid errors."""


class DigestSizeError(SiteIdError, ValueError):
    """A digest is not the size a format requires."""

    def __init__(self, required: int, actual: int) -> None:
        super().__init__(
            f"digest has {actual} bytes, {required} required"
        )
        self.required = required
        self.actual = actual


class UnknownFormatError(SiteIdError, ValueError):
    """A format selector could not be parsed."""


class GrammarUnavailableError(SiteIdError):
    """The tree-sitter grammar for a language cannot be imported."""


class SealedBucketError(SiteIdError):
    """A site was inserted into a bucket after it was sealed."""


class DuplicateSiteError(SiteIdError):
    """Two different sites resolve to the same generated constant."""

    def __init__(
        self,
        declaration: str,
        member: str,
        parameter: str,
        existing: CoordinateTuple,
        incoming: CoordinateTuple,
    ) -> None:
        super().__init__(
            f"{declaration}: {member}_{parameter} is annotated at both "
            f"{existing.location} and {incoming.location}"
        )
        self.declaration = declaration
        self.member = member
        self.parameter = parameter
        self.existing = existing
        self.incoming = incoming
