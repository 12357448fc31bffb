"""Frozen, identity-less domain types shared across all layers.

A :class:`CoordinateTuple` is the only input to the fingerprint. A
:class:`DeclarationKey` decides which emission unit a site lands in and
how its header is reproduced, but never feeds the fingerprint.
"""

from __future__ import annotations

from dataclasses import dataclass

from siteid.constants import COORDINATE_SEPARATOR


@dataclass(frozen=True, order=True)
class CoordinateTuple:
    """Static address of one annotation site.

    ``line`` and ``column`` are 0-based. Two tuples are equal iff all
    five fields are equal.
    """

    source_path: str
    member_name: str
    parameter_name: str
    line: int
    column: int

    def __post_init__(self) -> None:
        for name in ("source_path", "member_name", "parameter_name"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"{name} must be str")
        for name in ("line", "column"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be int")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def serialize(self) -> str:
        """Fingerprint input: ``path:member:parameter:line:column``."""
        return COORDINATE_SEPARATOR.join(
            (
                self.source_path,
                self.member_name,
                self.parameter_name,
                str(self.line),
                str(self.column),
            )
        )

    @property
    def location(self) -> str:
        return f"{self.source_path}({self.line},{self.column})"


@dataclass(frozen=True, order=True)
class TypeFrame:
    """One type declaration in a (possibly nested) owning-type chain."""

    name: str
    kind: str = "class"  # class, struct, record, record struct, interface
    is_static: bool = False
    type_parameters: tuple[str, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.type_parameters)

    @property
    def metadata_name(self) -> str:
        """Name with a generic arity marker, e.g. ``Box`1``."""
        if self.arity:
            return f"{self.name}`{self.arity}"
        return self.name


@dataclass(frozen=True, order=True)
class DeclarationKey:
    """Identity of an owning declaration: namespace plus type chain.

    ``frames`` runs from the outermost containing type to the owning
    type itself. An empty ``namespace`` means the global namespace.
    """

    namespace: str
    frames: tuple[TypeFrame, ...]

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError("a declaration needs at least one type frame")

    @classmethod
    def of(
        cls,
        name: str,
        namespace: str = "",
        *,
        kind: str = "class",
        is_static: bool = False,
        type_parameters: tuple[str, ...] = (),
    ) -> DeclarationKey:
        """Shorthand for a non-nested declaration."""
        frame = TypeFrame(
            name=name,
            kind=kind,
            is_static=is_static,
            type_parameters=type_parameters,
        )
        return cls(namespace=namespace, frames=(frame,))

    @property
    def owner(self) -> TypeFrame:
        return self.frames[-1]

    @property
    def name(self) -> str:
        return self.owner.name

    @property
    def is_nested(self) -> bool:
        return len(self.frames) > 1

    @property
    def qualified_name(self) -> str:
        """Dotted metadata name, unique per distinct key."""
        parts = [self.namespace] if self.namespace else []
        parts.extend(f.metadata_name for f in self.frames)
        return ".".join(parts)

    def nested(self, frame: TypeFrame) -> DeclarationKey:
        return DeclarationKey(
            namespace=self.namespace, frames=(*self.frames, frame)
        )
