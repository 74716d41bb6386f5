"""Tests for the JSDuck → TypeScript type converter."""

import pytest

from helpers import build_registry, class_record, param
from extdts.emitter import BUILTIN_TYPES, DiagnosticSink, ModuleScope, TypeConverter
from extdts.registry import Module, ParamRecord


@pytest.fixture
def converter():
    registry = build_registry(
        class_record("Ext.Component", alternateClassNames=["Ext.AbstractComponent"]),
        class_record("Ext.Element"),
        class_record("Ext.enums.Layout", enum={"type": "String"}),
        class_record("Ext.enums.Mixed", enum={"type": "String|Number"}),
    )
    return TypeConverter(registry, DiagnosticSink())


def _params(*raw):
    return [ParamRecord.model_validate(p) for p in raw]


# ── Builtins ────────────────────────────────────────────────────────


class TestBuiltins:
    @pytest.mark.parametrize("ext_type", sorted(BUILTIN_TYPES))
    def test_every_builtin_converts_deterministically(self, converter, ext_type):
        first = converter.convert(ext_type)
        assert first == BUILTIN_TYPES[ext_type]
        assert converter.convert(ext_type) == first
        assert not converter.diagnostics.items

    @pytest.mark.parametrize("ext_type, expected", [
        ("Number", "number"),
        ("Boolean", "boolean"),
        ("String", "string"),
        ("Object", "any"),
        ("Mixed", "any"),
        ("*", "any"),
        ("Array", "any[]"),
        ("HtmlElement", "HTMLElement"),
        ("TextNode", "Text"),
        ("null", "void"),
        ("undefined", "void"),
    ])
    def test_common_mappings(self, converter, ext_type, expected):
        assert converter.convert(ext_type) == expected


# ── Alternatives and arrays ─────────────────────────────────────────


class TestAlternatives:
    def test_pipe_union_keeps_order(self, converter):
        assert converter.convert("Ext.Element|Ext.Component") == "Ext.Element|Ext.Component"

    def test_slash_union(self, converter):
        assert converter.convert("String/HTMLElement/Ext.Element") == "string|HTMLElement|Ext.Element"

    def test_spaces_ignored(self, converter):
        assert converter.convert("String | Number") == "string|number"

    def test_array_suffix_preserved(self, converter):
        assert converter.convert("Ext.Component[]") == "Ext.Component[]"
        assert converter.convert("Number[][]") == "number[][]"

    def test_each_alternative_array_suffixed_independently(self, converter):
        assert converter.convert("Ext.Element[]|Ext.Component[]") == "Ext.Element[]|Ext.Component[]"
        assert converter.convert("String|Number[]") == "string|number[]"

    def test_alias_resolved_to_canonical_name(self, converter):
        assert converter.convert("Ext.AbstractComponent") == "Ext.Component"

    @pytest.mark.parametrize("ext_type", [
        "Ext.Component[][]",
        "String[]",
        "Ext.Element|Ext.Component[]",
        "Array",
        "TextNode",
    ])
    def test_reconversion_is_idempotent(self, converter, ext_type):
        once = converter.convert(ext_type)
        assert converter.convert(once) == once

    @pytest.mark.parametrize("ts_type", sorted(set(BUILTIN_TYPES.values())))
    def test_builtin_output_converts_to_itself(self, converter, ts_type):
        assert converter.convert(ts_type) == ts_type
        assert not converter.diagnostics.items


# ── Literals, unknowns, enums ───────────────────────────────────────


class TestSpecialSlots:
    def test_string_literal_passthrough(self, converter):
        assert converter.convert('"top"|"bottom"') == '"top"|"bottom"'
        assert converter.convert("'auto'") == "'auto'"

    def test_unresolved_type_becomes_any(self, converter):
        assert converter.convert("Ext.Missing") == "any"
        (diag,) = converter.diagnostics.items
        assert diag.kind == "unresolved-type"
        assert '"Ext.Missing"' in diag.message

    def test_unresolved_array_drops_suffix(self, converter):
        assert converter.convert("Ext.Missing[]") == "any"

    def test_unresolved_logged(self, converter, caplog):
        converter.convert("Ext.Missing")
        assert "Ext.Missing" in caplog.text

    def test_enum_substitutes_backing_type(self, converter):
        assert converter.convert("Ext.enums.Layout") == "string"
        assert converter.convert("Ext.enums.Layout[]") == "string[]"

    def test_union_enum_array_parenthesized(self, converter):
        assert converter.convert("Ext.enums.Mixed[]") == "(string|number)[]"


# ── Function types ──────────────────────────────────────────────────


class TestFunctionTypes:
    def test_plain_function_without_properties(self, converter):
        assert converter.convert("Function") == "Function"

    def test_callback_signature(self, converter):
        props = _params(
            param("item", "Ext.Component"),
            param("index", "Number"),
            param("return", "Boolean"),
        )
        assert converter.convert("Function", props) == (
            "(item: Ext.Component, index: number) => boolean"
        )

    def test_missing_return_defaults_to_any(self, converter):
        props = _params(param("item", "Ext.Component"))
        assert converter.convert("Function", props) == "(item: Ext.Component) => any"

    def test_empty_property_list(self, converter):
        assert converter.convert("Function", []) == "() => any"

    def test_function_in_union_parenthesized(self, converter):
        props = _params(param("value", "String"))
        assert converter.convert("Function|String", props) == "((value: string) => any)|string"

    def test_function_array_parenthesized(self, converter):
        props = _params(param("value", "String"))
        assert converter.convert("Function[]", props) == "((value: string) => any)[]"

    def test_optional_parameters_stay_optional(self, converter):
        props = _params(
            param("a", "String", optional=True),
            param("b", "String"),
        )
        assert converter.convert("Function", props) == "(a?: string, b?: string) => any"

    def test_keyword_parameter_names_escaped(self, converter):
        props = _params(param("default", "String"))
        assert converter.convert("Function", props) == "(default_: string) => any"

    def test_nested_callbacks(self, converter):
        props = _params(
            param("done", "Function", properties=[param("ok", "Boolean")]),
            param("return", "Function", properties=[param("return", "Number")]),
        )
        assert converter.convert("Function", props) == (
            "(done: (ok: boolean) => any) => () => number"
        )

    def test_duplicate_parameter_dropped(self, converter):
        props = _params(param("a", "String"), param("a", "Number"), param("b", "Boolean"))
        assert converter.convert("Function", props) == "(a: string, b: boolean) => any"
        (diag,) = converter.diagnostics.items
        assert diag.kind == "duplicate-param"

    def test_rest_parameter(self, converter):
        props = _params(
            param("a", "String"),
            param("rest", "Mixed..."),
            param("return", "Boolean"),
        )
        assert converter.convert("Function", props) == "(a: string, ...rest: any[]) => boolean"
        assert not converter.diagnostics.items

    def test_rest_parameter_union_element(self, converter):
        props = _params(param("items", "String|Ext.Element..."))
        assert converter.convert("Function", props) == "(...items: (string|Ext.Element)[]) => any"

    def test_rest_parameter_collapses_trailing_params(self, converter):
        props = _params(param("rest", "Number..."), param("last", "String"))
        assert converter.convert("Function", props) == "(...rest: any[]) => any"

    def test_duplicate_and_rest_together(self, converter):
        props = _params(param("a", "String"), param("a", "Number"), param("rest", "Mixed..."))
        assert converter.convert("Function", props) == "(a: string, ...rest: any[]) => any"
        assert [d.kind for d in converter.diagnostics.items] == ["duplicate-param"]


# ── Module scope aliasing ───────────────────────────────────────────


class TestModuleScope:
    def _scope(self, *base_names):
        return ModuleScope(name="Ext", shadowed=frozenset(base_names))

    def test_unshadowed_builtin_unchanged(self, converter):
        assert converter.convert("Date", scope=self._scope("Panel")) == "Date"

    def test_shadowed_builtin_aliased(self, converter):
        scope = self._scope("Date")
        assert converter.convert("Date[]", scope=scope) == "__Date[]"
        assert scope.aliases == {"Date": "__Date"}

    def test_alias_reused(self, converter):
        scope = self._scope("Function")
        converter.convert("Function", scope=scope)
        converter.convert("Function|Date", scope=scope)
        assert scope.aliases == {"Function": "__Function"}

    def test_for_module_collects_base_names(self):
        registry = build_registry(class_record("Ext.Date"), class_record("Ext.Error"))
        scope = ModuleScope.for_module(
            Module(name="Ext", classes=registry.classes), alias_prefix="Native"
        )
        assert scope.shadowed == {"Date", "Error"}
        assert scope.resolve_builtin("Error") == "NativeError"
        assert scope.resolve_builtin("string") == "string"

    def test_array_of(self, converter):
        assert converter.array_of("string") == "string[]"
        assert converter.array_of("string|number") == "(string|number)[]"
        assert converter.array_of("(a: string) => any") == "((a: string) => any)[]"
