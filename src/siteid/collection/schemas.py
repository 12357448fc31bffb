"""Models for the collection data flow."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from siteid.constants import IdFormat, OccurrenceKind, constant_name
from siteid.identity.value_objects import CoordinateTuple, DeclarationKey


class AnnotationOccurrence(BaseModel):
    """One attribute occurrence reported by an analysis front end."""

    model_config = ConfigDict(frozen=True)

    source_path: str
    declaration: DeclarationKey
    member_name: str
    parameter_name: str
    line: int = Field(ge=0)
    column: int = Field(ge=0)
    format: IdFormat = IdFormat.HEX16
    kind: OccurrenceKind = OccurrenceKind.PARAMETER
    annotated: bool = True

    @property
    def coordinates(self) -> CoordinateTuple:
        return CoordinateTuple(
            source_path=self.source_path,
            member_name=self.member_name,
            parameter_name=self.parameter_name,
            line=self.line,
            column=self.column,
        )


@dataclass(frozen=True)
class ResolvedSite:
    """An annotated parameter, ready for grouping."""

    declaration: DeclarationKey
    member: str
    parameter: str
    coordinates: CoordinateTuple
    format: IdFormat = IdFormat.HEX16

    @property
    def constant_name(self) -> str:
        return constant_name(self.member, self.parameter)
