"""Render a bucket into a C# partial declaration holding its constants."""

from __future__ import annotations

from dataclasses import dataclass

from siteid.constants import (
    ATTRIBUTE_UNIT_NAME,
    AUTO_GENERATED_MARKER,
    CSHARP_FORMAT_ENUM,
    DEFAULT_UNIT_SUFFIX,
    INDENT,
    constant_name,
)
from siteid.generation.grouping import Bucket
from siteid.identity.value_objects import DeclarationKey, TypeFrame


@dataclass(frozen=True)
class EmissionUnit:
    """One generated source unit, handed to a sink."""

    unit_name: str
    text: str
    constant_count: int = 0


def unit_name(
    declaration: DeclarationKey, suffix: str = DEFAULT_UNIT_SUFFIX
) -> str:
    """Sink name for a declaration, e.g. ``Demo.Outer.Inner_UniqueIds``.

    Built from the namespace and the full type chain (with generic
    arity), so distinct declarations never share a name.
    """
    return f"{declaration.qualified_name}{suffix}"


def type_header(frame: TypeFrame) -> str:
    """Declaration line reproducing static-ness, kind and generics."""
    modifiers = "static partial" if frame.is_static else "partial"
    generics = (
        f"<{', '.join(frame.type_parameters)}>"
        if frame.type_parameters
        else ""
    )
    return f"{modifiers} {frame.kind} {frame.name}{generics}"


def render_unit(
    bucket: Bucket,
    declaration: DeclarationKey | None = None,
    *,
    suffix: str = DEFAULT_UNIT_SUFFIX,
) -> EmissionUnit:
    """Render one declaration's constants as a self-contained unit."""
    key = declaration or bucket.declaration
    lines: list[str] = [AUTO_GENERATED_MARKER, "using System;", ""]

    depth = 0
    if key.namespace:
        lines.append(f"namespace {key.namespace}")
        lines.append("{")
        depth += 1

    for frame in key.frames:
        lines.append(f"{INDENT * depth}{type_header(frame)}")
        lines.append(f"{INDENT * depth}{{")
        depth += 1

    pad = INDENT * depth
    count = 0
    for member, parameter, entry in bucket.constants():
        lines.append(
            f"{pad}// Auto-generated for parameter {parameter} "
            f"in method {member}"
        )
        lines.append(
            f'{pad}public const string {constant_name(member, parameter)}'
            f' = "{entry.identifier}";'
        )
        count += 1

    while depth:
        depth -= 1
        lines.append(f"{INDENT * depth}}}")

    return EmissionUnit(
        unit_name=unit_name(key, suffix),
        text="\n".join(lines) + "\n",
        constant_count=count,
    )


def render_attribute_unit(namespace: str) -> EmissionUnit:
    """Source of the attribute and format enum that annotated code uses."""
    body = f'''{AUTO_GENERATED_MARKER}
using System;

namespace {namespace}
{{
    /// <summary>
    /// Format options for generated unique IDs.
    /// </summary>
    public enum {CSHARP_FORMAT_ENUM}
    {{
        /// <summary>16-character lowercase hex string (default).</summary>
        Hex16 = 0,

        /// <summary>32-character lowercase hex string (full MD5 hash).</summary>
        Hex32 = 1,

        /// <summary>GUID format with dashes.</summary>
        Guid = 2,

        /// <summary>8-character lowercase hex string.</summary>
        Hex8 = 3,

        /// <summary>
        /// 6 characters valid as an HTML element ID: a lowercase letter
        /// followed by lowercase letters, digits, hyphens or underscores.
        /// </summary>
        HtmlId = 4
    }}

    /// <summary>
    /// Marks a parameter that receives a unique ID at compile time.
    /// </summary>
    [AttributeUsage(AttributeTargets.Parameter, AllowMultiple = false)]
    public sealed class UniqueIdAttribute : Attribute
    {{
        public {CSHARP_FORMAT_ENUM} Format {{ get; }}

        public UniqueIdAttribute()
        {{
            Format = {CSHARP_FORMAT_ENUM}.Hex16;
        }}

        public UniqueIdAttribute({CSHARP_FORMAT_ENUM} format)
        {{
            Format = format;
        }}
    }}
}}
'''
    return EmissionUnit(unit_name=ATTRIBUTE_UNIT_NAME, text=body)
