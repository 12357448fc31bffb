"""Find attributed parameters in C# sources via tree-sitter."""

from __future__ import annotations

import importlib
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import tree_sitter

from siteid.collection.discovery import discover_sources, relative_source_path
from siteid.collection.schemas import AnnotationOccurrence
from siteid.config import Settings
from siteid.constants import IdFormat, OccurrenceKind
from siteid.errors import GrammarUnavailableError, UnknownFormatError
from siteid.identity.formats import parse_format
from siteid.identity.value_objects import DeclarationKey, TypeFrame

logger = logging.getLogger(__name__)

GRAMMAR_MODULE = "tree_sitter_c_sharp"

# Type declarations that can own generated constants.
_TYPE_KINDS: dict[str, str] = {
    "class_declaration": "class",
    "struct_declaration": "struct",
    "interface_declaration": "interface",
    "record_declaration": "record",
    "record_struct_declaration": "record struct",
}

# Declarations whose parameter lists are scanned.
_MEMBER_NODE_TYPES = frozenset({
    "method_declaration",
    "constructor_declaration",
    "local_function_statement",
})

_NAME_SEPARATORS = re.compile(r"\.|::")


@dataclass
class _ScanContext:
    source_path: str
    source: bytes
    attribute_names: frozenset[str]
    default_format: IdFormat
    occurrences: list[AnnotationOccurrence] = field(
        default_factory=lambda: list[AnnotationOccurrence]()
    )


class CSharpSiteSource:
    """Site source that scans every C# file under a directory."""

    def __init__(self, root: Path, settings: Settings | None = None) -> None:
        self.root = Path(root)
        self.settings = settings or Settings()
        self.files_scanned = 0

    def occurrences(self) -> Iterator[AnnotationOccurrence]:
        for path in discover_sources(self.root, self.settings):
            try:
                data = path.read_bytes()
            except OSError as exc:
                logger.warning(
                    "event=source_unreadable path=%s error=%s", path, exc
                )
                continue
            self.files_scanned += 1
            yield from scan_source(
                data,
                relative_source_path(path, self.root),
                self.settings,
            )


def scan_source(
    source: bytes | str,
    source_path: str,
    settings: Settings | None = None,
) -> list[AnnotationOccurrence]:
    """Return an occurrence for every parameter that carries attributes.

    Parameters whose attributes include the identifier attribute are
    marked ``annotated``; the rest are reported unannotated so the
    collector can filter them.
    """
    cfg = settings or Settings()
    data = source.encode("utf-8") if isinstance(source, str) else source
    tree = get_parser().parse(data)
    if tree.root_node.has_error:
        logger.debug("event=parse_recovered path=%s", source_path)

    ctx = _ScanContext(
        source_path=source_path,
        source=data,
        attribute_names=cfg.attribute_name_set,
        default_format=cfg.default_format,
    )
    _walk(tree.root_node, "", (), ctx)
    return ctx.occurrences


def _walk(
    node: tree_sitter.Node,
    namespace: str,
    frames: tuple[TypeFrame, ...],
    ctx: _ScanContext,
) -> None:
    """Visit children, tracking the enclosing namespace and types."""
    current_ns = namespace
    for child in node.named_children:
        node_type = child.type
        if node_type == "namespace_declaration":
            inner = _join_namespace(
                current_ns, _text(child.child_by_field_name("name"))
            )
            body = child.child_by_field_name("body")
            if body is not None:
                _walk(body, inner, frames, ctx)
        elif node_type == "file_scoped_namespace_declaration":
            # Applies to every following sibling in the compilation unit
            current_ns = _join_namespace(
                namespace, _text(child.child_by_field_name("name"))
            )
            _walk(child, current_ns, frames, ctx)
        elif node_type in _TYPE_KINDS:
            frame = _type_frame(child)
            if frame is not None:
                _walk(child, current_ns, (*frames, frame), ctx)
        elif node_type in _MEMBER_NODE_TYPES:
            if frames:
                _collect_parameters(child, current_ns, frames, ctx)
            _walk(child, current_ns, frames, ctx)
        else:
            _walk(child, current_ns, frames, ctx)


def _type_frame(node: tree_sitter.Node) -> TypeFrame | None:
    name = _identifier(node.child_by_field_name("name"))
    if not name:
        return None

    kind = _TYPE_KINDS[node.type]
    if node.type == "record_declaration" and any(
        c.type == "struct" for c in node.children
    ):
        kind = "record struct"

    return TypeFrame(
        name=name,
        kind=kind,
        is_static="static" in _modifiers(node),
        type_parameters=_type_parameters(node),
    )


def _modifiers(node: tree_sitter.Node) -> set[str]:
    mods: set[str] = set()
    for child in node.children:
        if child.type == "modifier":
            mods.add(_text(child))
        elif child.type in ("static", "partial"):
            mods.add(child.type)
    return mods


def _type_parameters(node: tree_sitter.Node) -> tuple[str, ...]:
    for child in node.children:
        if child.type != "type_parameter_list":
            continue
        names: list[str] = []
        for param in child.named_children:
            if param.type != "type_parameter":
                continue
            name_node = param.child_by_field_name("name")
            if name_node is None:
                idents = [
                    c for c in param.named_children
                    if c.type == "identifier"
                ]
                name_node = idents[-1] if idents else None
            if name_node is not None:
                names.append(_identifier(name_node))
        return tuple(names)
    return ()


def _collect_parameters(
    member: tree_sitter.Node,
    namespace: str,
    frames: tuple[TypeFrame, ...],
    ctx: _ScanContext,
) -> None:
    params = member.child_by_field_name("parameters")
    if params is None:
        return

    # Constructors are keyed by their type name
    if member.type == "constructor_declaration":
        member_name = frames[-1].name
    else:
        member_name = _identifier(member.child_by_field_name("name"))
    if not member_name:
        return

    declaration = DeclarationKey(namespace=namespace, frames=frames)
    for param in params.named_children:
        if param.type != "parameter":
            continue
        attribute_lists = [
            c for c in param.named_children if c.type == "attribute_list"
        ]
        name_node = param.child_by_field_name("name")
        if not attribute_lists or name_node is None:
            continue

        attribute = _find_attribute(attribute_lists, ctx.attribute_names)
        fmt = (
            _attribute_format(attribute, ctx)
            if attribute is not None
            else ctx.default_format
        )
        ctx.occurrences.append(
            AnnotationOccurrence(
                source_path=ctx.source_path,
                declaration=declaration,
                member_name=member_name,
                parameter_name=_identifier(name_node),
                line=param.start_point.row,
                column=_character_column(ctx.source, param.start_byte),
                format=fmt,
                kind=OccurrenceKind.PARAMETER,
                annotated=attribute is not None,
            )
        )


def _find_attribute(
    attribute_lists: list[tree_sitter.Node],
    names: frozenset[str],
) -> tree_sitter.Node | None:
    for attr_list in attribute_lists:
        for attribute in attr_list.named_children:
            if attribute.type != "attribute":
                continue
            full_name = _text(attribute.child_by_field_name("name"))
            if _NAME_SEPARATORS.split(full_name)[-1].strip() in names:
                return attribute
    return None


def _attribute_format(
    attribute: tree_sitter.Node, ctx: _ScanContext
) -> IdFormat:
    """Format from the attribute's first argument, else the default."""
    for child in attribute.named_children:
        if child.type != "attribute_argument_list":
            continue
        arguments = [
            a for a in child.named_children
            if a.type == "attribute_argument"
        ]
        if not arguments or not arguments[0].named_children:
            break
        expression = _text(arguments[0].named_children[-1])
        try:
            return parse_format(expression)
        except UnknownFormatError:
            logger.warning(
                "event=unknown_format path=%s value=%s",
                ctx.source_path,
                expression,
            )
            break
    return ctx.default_format


def _join_namespace(outer: str, inner: str) -> str:
    if not outer:
        return inner
    if not inner:
        return outer
    return f"{outer}.{inner}"


def _text(node: tree_sitter.Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _identifier(node: tree_sitter.Node | None) -> str:
    """Identifier text without the verbatim ``@`` prefix."""
    return _text(node).removeprefix("@")


def _character_column(data: bytes, offset: int) -> int:
    """Column of byte ``offset`` counted in UTF-16 code units.

    tree-sitter reports columns in bytes; C# tooling counts characters.
    """
    line_start = data.rfind(b"\n", 0, offset) + 1
    prefix = data[line_start:offset].decode("utf-8", errors="replace")
    return len(prefix.encode("utf-16-le")) // 2


# ---------------------------------------------------------------------------
# Parser cache
# ---------------------------------------------------------------------------

_parser_cache: dict[str, tree_sitter.Parser] = {}


def get_parser() -> tree_sitter.Parser:
    """Get or create the cached C# parser."""
    if GRAMMAR_MODULE in _parser_cache:
        return _parser_cache[GRAMMAR_MODULE]

    try:
        mod = importlib.import_module(GRAMMAR_MODULE)
        capsule: object = mod.language()
        parser = tree_sitter.Parser(tree_sitter.Language(capsule))
    except (ImportError, AttributeError) as exc:
        raise GrammarUnavailableError(
            f"tree-sitter grammar {GRAMMAR_MODULE!r} is not installed"
        ) from exc
    _parser_cache[GRAMMAR_MODULE] = parser
    return parser
