"""ext-dts - TypeScript declarations for Ext JS, generated from JSDuck exports."""

from extdts.config import ExtDtsConfig, load_config
from extdts.emitter import DeclarationEmitter, TypeConverter
from extdts.output import DeclarationWriter
from extdts.registry import ClassRegistry, SchemaMismatchError
from extdts.toolchain import ToolchainError, build_version, generate_declarations

__version__ = "0.1.0"

__all__ = [
    "ClassRegistry",
    "DeclarationEmitter",
    "DeclarationWriter",
    "ExtDtsConfig",
    "SchemaMismatchError",
    "ToolchainError",
    "TypeConverter",
    "build_version",
    "generate_declarations",
    "load_config",
]
