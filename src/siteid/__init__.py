"""siteid: stable per-site identifiers for annotated C# parameters."""

from siteid.collection import (
    AnnotationOccurrence,
    ResolvedSite,
    SiteSource,
    StaticSiteSource,
    collect_sites,
)
from siteid.config import Settings
from siteid.constants import DuplicatePolicy, IdFormat, OccurrenceKind
from siteid.errors import (
    DigestSizeError,
    DuplicateSiteError,
    GrammarUnavailableError,
    SealedBucketError,
    SiteIdError,
    UnknownFormatError,
)
from siteid.generation import (
    DirectorySink,
    EmissionUnit,
    GenerationResult,
    MemorySink,
    UnitSink,
    generate,
    group,
    render_unit,
    run_generation,
)
from siteid.identity import (
    CoordinateTuple,
    DeclarationKey,
    TypeFrame,
    fingerprint,
    identify,
    parse_format,
    render,
)

__version__ = "0.1.0"

__all__ = [
    "AnnotationOccurrence",
    "CoordinateTuple",
    "DeclarationKey",
    "DigestSizeError",
    "DirectorySink",
    "DuplicatePolicy",
    "DuplicateSiteError",
    "EmissionUnit",
    "GenerationResult",
    "GrammarUnavailableError",
    "IdFormat",
    "MemorySink",
    "OccurrenceKind",
    "ResolvedSite",
    "SealedBucketError",
    "Settings",
    "SiteIdError",
    "SiteSource",
    "StaticSiteSource",
    "TypeFrame",
    "UnitSink",
    "UnknownFormatError",
    "collect_sites",
    "fingerprint",
    "generate",
    "group",
    "identify",
    "parse_format",
    "render",
    "render_unit",
    "run_generation",
]
