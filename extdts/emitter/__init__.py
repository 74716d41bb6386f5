"""Declaration emitter subsystem: JSDuck records to TypeScript declarations."""

from extdts.emitter.diagnostics import DiagnosticSink, count_by_kind
from extdts.emitter.emitter import DeclarationEmitter
from extdts.emitter.models import Diagnostic, ModuleDeclaration, ModuleScope
from extdts.emitter.types import BUILTIN_TYPES, TypeConverter

__all__ = [
    "BUILTIN_TYPES",
    "DeclarationEmitter",
    "Diagnostic",
    "DiagnosticSink",
    "ModuleDeclaration",
    "ModuleScope",
    "TypeConverter",
    "count_by_kind",
]
