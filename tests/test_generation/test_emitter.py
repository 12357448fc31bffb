"""Tests for rendering buckets into C# source units."""

from __future__ import annotations

import re

from siteid.collection.collector import StaticSiteSource, collect_sites
from siteid.constants import AUTO_GENERATED_MARKER
from siteid.generation.emitter import (
    render_attribute_unit,
    render_unit,
    type_header,
    unit_name,
)
from siteid.generation.grouping import Bucket, build_bucket, group
from siteid.identity.value_objects import DeclarationKey, TypeFrame

from tests.conftest import WIDGET, make_occurrence

CONSTANT_LINE = re.compile(r'public const string (\w+) = "([^"]*)";')


def _bucket_for(declaration: DeclarationKey, *members: str) -> Bucket:
    occurrences = [
        make_occurrence(m, "id", line=i, declaration=declaration)
        for i, m in enumerate(members)
    ]
    sites = collect_sites(StaticSiteSource(occurrences))
    return build_bucket(declaration, sites)


def _constants(text: str) -> dict[str, str]:
    return dict(CONSTANT_LINE.findall(text))


class TestRenderUnit:
    def test_widget_scenario(self, widget_source: StaticSiteSource) -> None:
        bucket = group(collect_sites(widget_source))[WIDGET]
        unit = render_unit(bucket, WIDGET)

        constants = _constants(unit.text)
        assert set(constants) == {"A_x_Id", "B_y_Id"}
        assert all(re.fullmatch(r"[a-f0-9]{16}", v) for v in constants.values())
        assert constants["A_x_Id"] != constants["B_y_Id"]
        assert unit.constant_count == 2
        assert unit.unit_name == "Widget_UniqueIds"

    def test_global_namespace_layout(self) -> None:
        bucket = Bucket(WIDGET)
        site = collect_sites(StaticSiteSource([make_occurrence("A", "x")]))[0]
        bucket.insert(site, "0123456789abcdef")
        text = render_unit(bucket).text
        assert text == (
            "// <auto-generated/>\n"
            "using System;\n"
            "\n"
            "partial class Widget\n"
            "{\n"
            "    // Auto-generated for parameter x in method A\n"
            '    public const string A_x_Id = "0123456789abcdef";\n'
            "}\n"
        )

    def test_namespace_wraps_declaration(self) -> None:
        decl = DeclarationKey.of("Page", "Demo.Web")
        text = render_unit(_bucket_for(decl, "Render")).text
        lines = text.splitlines()
        assert lines[0] == AUTO_GENERATED_MARKER
        assert "namespace Demo.Web" in lines
        assert "    partial class Page" in lines
        assert "namespace" not in render_unit(_bucket_for(WIDGET, "A")).text

    def test_static_declaration_stays_static(self) -> None:
        decl = DeclarationKey.of("Helpers", "Demo", is_static=True)
        text = render_unit(_bucket_for(decl, "Pair")).text
        assert "    static partial class Helpers" in text.splitlines()

    def test_nested_declaration_wraps_containing_types(self) -> None:
        decl = DeclarationKey.of("Outer", "Demo").nested(
            TypeFrame(name="Inner", kind="struct")
        )
        text = render_unit(_bucket_for(decl, "Get")).text
        lines = text.splitlines()
        outer = lines.index("    partial class Outer")
        inner = lines.index("        partial struct Inner")
        assert outer < inner
        assert '            public const string Get_id_Id = "' in text
        # Braces balance
        assert text.count("{") == text.count("}")

    def test_generic_declaration_keeps_type_parameters(self) -> None:
        decl = DeclarationKey.of("Box", type_parameters=("TKey", "TValue"))
        unit = render_unit(_bucket_for(decl, "Put"))
        assert "partial class Box<TKey, TValue>" in unit.text
        assert unit.unit_name == "Box`2_UniqueIds"

    def test_one_constant_per_site(self) -> None:
        bucket = _bucket_for(WIDGET, "A", "B", "C")
        unit = render_unit(bucket)
        assert set(_constants(unit.text)) == {"A_id_Id", "B_id_Id", "C_id_Id"}
        assert unit.text.count("// Auto-generated for parameter id") == 3

    def test_constant_values_match_bucket(self) -> None:
        bucket = _bucket_for(WIDGET, "A", "B")
        constants = _constants(render_unit(bucket).text)
        for member, parameter, entry in bucket.constants():
            assert constants[f"{member}_{parameter}_Id"] == entry.identifier

    def test_custom_suffix(self) -> None:
        unit = render_unit(_bucket_for(WIDGET, "A"), suffix=".Ids")
        assert unit.unit_name == "Widget.Ids"

    def test_rendering_is_deterministic(self) -> None:
        a = render_unit(_bucket_for(WIDGET, "A", "B")).text
        b = render_unit(_bucket_for(WIDGET, "A", "B")).text
        assert a == b


class TestUnitNames:
    def test_distinct_declarations_get_distinct_names(self) -> None:
        keys = [
            DeclarationKey.of("Widget"),
            DeclarationKey.of("Widget", "Demo"),
            DeclarationKey.of("Widget", "Demo.Ui"),
            DeclarationKey.of("Widget", "Demo", type_parameters=("T",)),
            DeclarationKey.of("Outer", "Demo").nested(TypeFrame(name="Widget")),
            DeclarationKey.of("Outer").nested(TypeFrame(name="Widget")),
        ]
        names = [unit_name(k) for k in keys]
        assert len(set(names)) == len(keys)

    def test_name_shapes(self) -> None:
        assert unit_name(DeclarationKey.of("Widget")) == "Widget_UniqueIds"
        nested = DeclarationKey.of("Outer", "Demo").nested(
            TypeFrame(name="Slot", type_parameters=("T",))
        )
        assert unit_name(nested) == "Demo.Outer.Slot`1_UniqueIds"


class TestTypeHeader:
    def test_plain_class(self) -> None:
        assert type_header(TypeFrame(name="A")) == "partial class A"

    def test_static_generic_class(self) -> None:
        frame = TypeFrame(name="A", is_static=True, type_parameters=("T",))
        assert type_header(frame) == "static partial class A<T>"

    def test_record_struct(self) -> None:
        frame = TypeFrame(name="R", kind="record struct")
        assert type_header(frame) == "partial record struct R"


class TestAttributeUnit:
    def test_declares_enum_and_attribute(self) -> None:
        unit = render_attribute_unit("Praefixum")
        assert unit.unit_name == "UniqueIdAttribute"
        assert "namespace Praefixum" in unit.text
        assert "public enum UniqueIdFormat" in unit.text
        assert "public sealed class UniqueIdAttribute : Attribute" in unit.text
        assert "AttributeTargets.Parameter" in unit.text

    def test_enum_ordinals(self) -> None:
        text = render_attribute_unit("Praefixum").text
        for member, ordinal in (
            ("Hex16", 0),
            ("Hex32", 1),
            ("Guid", 2),
            ("Hex8", 3),
            ("HtmlId", 4),
        ):
            assert re.search(rf"\b{member} = {ordinal}\b", text)

    def test_custom_namespace(self) -> None:
        text = render_attribute_unit("My.Tools").text
        assert "namespace My.Tools" in text
        assert text.count("{") == text.count("}")
