"""Conversion of JSDuck type strings into TypeScript type expressions."""

from __future__ import annotations

import re
from collections.abc import Sequence

from extdts.emitter.diagnostics import DiagnosticSink
from extdts.emitter.models import ModuleScope
from extdts.emitter.naming import escape_param_name
from extdts.registry.models import ParamRecord
from extdts.registry.registry import ClassRegistry

BUILTIN_TYPES: dict[str, str] = {
    "*": "any",
    "any": "any",
    "Arguments": "any",
    "Array": "any[]",
    "boolean": "boolean",
    "Boolean": "boolean",
    "CSSStyleSheet": "CSSStyleSheet",
    "CSSStyleRule": "CSSStyleRule",
    "Date": "Date",
    "Error": "Error",
    "Event": "Event",
    "Function": "Function",
    "HtmlElement": "HTMLElement",
    "HTMLElement": "HTMLElement",
    "null": "void",
    "number": "number",
    "Number": "number",
    "NodeList": "NodeList",
    "Mixed": "any",
    "Object": "any",
    "RegExp": "RegExp",
    "string": "string",
    "String": "string",
    "Text": "Text",
    "TextNode": "Text",
    "undefined": "void",
    "void": "void",
    "XMLElement": "any",
    "Window": "Window",
}

FUNCTION_TYPE = "Function"
UNKNOWN_TYPE = "any"
RETURN_PROPERTY = "return"
REST_MARKER = "..."

_ARRAY_SUFFIX_RE = re.compile(r"(?:\[\])*$")
_ALTERNATIVE_SEP_RE = re.compile(r"[|/]")


def _is_string_literal(slot: str) -> bool:
    return len(slot) >= 2 and slot[0] == slot[-1] and slot[0] in "\"'"


def _needs_parens(type_text: str) -> bool:
    return "|" in type_text or "=>" in type_text


class TypeConverter:
    """Maps JSDuck's informal type grammar onto TypeScript.

    Handles ``|``/``/`` alternatives, trailing ``[]`` markers, callback
    types described by nested properties, string literal types, the builtin
    table, registry classes and enums. Anything unresolved becomes ``any``
    and is reported to the diagnostic sink.
    """

    def __init__(self, registry: ClassRegistry, diagnostics: DiagnosticSink | None = None) -> None:
        self.registry = registry
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()

    def convert(
        self,
        ext_type: str,
        properties: Sequence[ParamRecord] | None = None,
        scope: ModuleScope | None = None,
    ) -> str:
        slots = _ALTERNATIVE_SEP_RE.split(ext_type.replace(" ", ""))
        in_union = len(slots) > 1
        return "|".join(
            self._convert_slot(slot, ext_type, properties, scope, in_union) for slot in slots
        )

    def array_of(self, type_text: str) -> str:
        """Array type whose elements are *type_text*."""
        if _needs_parens(type_text):
            return f"({type_text})[]"
        return f"{type_text}[]"

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _convert_slot(
        self,
        slot: str,
        ext_type: str,
        properties: Sequence[ParamRecord] | None,
        scope: ModuleScope | None,
        in_union: bool,
    ) -> str:
        arrays = _ARRAY_SUFFIX_RE.search(slot).group(0)
        if arrays:
            slot = slot[: -len(arrays)]

        if slot == FUNCTION_TYPE and properties is not None:
            fn_type = self._function_type(properties, scope, ext_type)
            if in_union or arrays:
                fn_type = f"({fn_type})"
            return fn_type + arrays

        if _is_string_literal(slot):
            return slot + arrays

        builtin = BUILTIN_TYPES.get(slot)
        if builtin is not None:
            if scope is not None:
                builtin = scope.resolve_builtin(builtin)
            return builtin + arrays

        cls = self.registry.lookup_class(slot)
        if cls is None:
            self.diagnostics.warn(
                "unresolved-type",
                ext_type,
                f'unable to find class, using "{UNKNOWN_TYPE}" instead: "{slot}"',
            )
            return UNKNOWN_TYPE

        if cls.enum is not None:
            # enums (e.g. Ext.enums.Widget) are typed by their backing values
            backing = self.convert(cls.enum.type, scope=scope)
            if arrays and _needs_parens(backing):
                backing = f"({backing})"
            return backing + arrays
        return cls.name + arrays

    def _function_type(
        self,
        properties: Sequence[ParamRecord],
        scope: ModuleScope | None,
        subject: str = FUNCTION_TYPE,
    ) -> str:
        # undocumented return is not the same as no return value
        return_type = UNKNOWN_TYPE
        arguments: list[ParamRecord] = []
        for prop in properties:
            if prop.name == RETURN_PROPERTY:
                return_type = self.convert(prop.type, prop.properties, scope)
            else:
                arguments.append(prop)

        params: list[str] = []
        seen: set[str] = set()
        optional = False
        for index, prop in enumerate(arguments):
            name = escape_param_name(prop.name)
            if name in seen:
                self.diagnostics.warn(
                    "duplicate-param",
                    f"{subject}#{name}",
                    "skipping duplicate callback parameter",
                )
                continue
            seen.add(name)
            optional = optional or prop.optional

            if prop.type.endswith(REST_MARKER):
                if index < len(arguments) - 1:
                    params.append(f"...{name}: {UNKNOWN_TYPE}[]")
                else:
                    element = self.convert(prop.type[: -len(REST_MARKER)], prop.properties, scope)
                    params.append(f"...{name}: {self.array_of(element)}")
                break

            prop_type = self.convert(prop.type, prop.properties, scope)
            marker = "?" if optional else ""
            params.append(f"{name}{marker}: {prop_type}")
        return f"({', '.join(params)}) => {return_type}"
