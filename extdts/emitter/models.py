"""Models shared by the emitter subsystem."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

from extdts.registry.models import Module

_ARRAY_SUFFIX_RE = re.compile(r"(?:\[\])*$")

DiagnosticKind = Literal[
    "unresolved-type",
    "unresolved-parent",
    "duplicate-param",
    "duplicate-member",
    "member-collision",
]


class Diagnostic(BaseModel):
    """A non-fatal anomaly found while emitting declarations."""

    kind: DiagnosticKind
    subject: str
    message: str


@dataclass
class ModuleScope:
    """Per-namespace emission state.

    ``shadowed`` holds the base names of every class declared in the module;
    a builtin type whose name is in it must be referenced through an alias.
    Aliases are assigned on first use and reused for the rest of the module.
    """

    name: str
    shadowed: frozenset[str] = frozenset()
    alias_prefix: str = "__"
    aliases: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_module(cls, module: Module, alias_prefix: str = "__") -> ModuleScope:
        return cls(
            name=module.name,
            shadowed=frozenset(c.base_name for c in module.classes),
            alias_prefix=alias_prefix,
        )

    def resolve_builtin(self, target: str) -> str:
        """Return *target*, or its alias if the module shadows its identifier."""
        arrays = _ARRAY_SUFFIX_RE.search(target).group(0)
        ident = target[: len(target) - len(arrays)]
        if ident not in self.shadowed:
            return target
        alias = self.aliases.get(ident)
        if alias is None:
            alias = self.aliases[ident] = f"{self.alias_prefix}{ident}"
        return alias + arrays


@dataclass(frozen=True)
class ModuleDeclaration:
    """Emitted text of one module plus the builtin aliases it relies on."""

    name: str
    text: str
    builtin_aliases: dict[str, str] = field(default_factory=dict)
