"""Generation: grouping, emission and the end-to-end runner."""

from siteid.generation.emitter import (
    EmissionUnit,
    render_attribute_unit,
    render_unit,
    type_header,
    unit_name,
)
from siteid.generation.grouping import (
    Bucket,
    BucketEntry,
    build_bucket,
    group,
    identify_site,
    partition_by_declaration,
)
from siteid.generation.runner import (
    GenerationResult,
    UnitOutcome,
    build_unit,
    generate,
    run_generation,
)
from siteid.generation.sinks import DirectorySink, MemorySink, UnitSink

__all__ = [
    "Bucket",
    "BucketEntry",
    "DirectorySink",
    "EmissionUnit",
    "GenerationResult",
    "MemorySink",
    "UnitOutcome",
    "UnitSink",
    "build_bucket",
    "build_unit",
    "generate",
    "group",
    "identify_site",
    "partition_by_declaration",
    "render_attribute_unit",
    "render_unit",
    "run_generation",
    "type_header",
    "unit_name",
]
