"""Shared test fixtures: synthetic feeds, settings and the C# fixture tree."""

from __future__ import annotations

from pathlib import Path

import pytest

from siteid.collection.collector import StaticSiteSource
from siteid.collection.schemas import AnnotationOccurrence
from siteid.config import Settings
from siteid.constants import IdFormat, OccurrenceKind
from siteid.identity.value_objects import DeclarationKey

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "csharp_repo"

WIDGET = DeclarationKey.of("Widget")


def make_occurrence(
    member: str = "GetId",
    parameter: str = "id",
    *,
    line: int = 0,
    column: int = 0,
    declaration: DeclarationKey = WIDGET,
    source_path: str = "src/Widget.cs",
    fmt: IdFormat = IdFormat.HEX16,
    kind: OccurrenceKind = OccurrenceKind.PARAMETER,
    annotated: bool = True,
) -> AnnotationOccurrence:
    """Build one feed record with sensible defaults."""
    return AnnotationOccurrence(
        source_path=source_path,
        declaration=declaration,
        member_name=member,
        parameter_name=parameter,
        line=line,
        column=column,
        format=fmt,
        kind=kind,
        annotated=annotated,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def widget_source() -> StaticSiteSource:
    """Two sites on ``Widget``: ``A(x)`` at 4:10 and ``B(y)`` at 9:3."""
    return StaticSiteSource(
        [
            make_occurrence("A", "x", line=4, column=10),
            make_occurrence("B", "y", line=9, column=3),
        ]
    )
