"""Class registry subsystem: loads JSDuck exports into lookup tables."""

from extdts.registry.models import (
    ClassRecord,
    ConfigMember,
    EnumInfo,
    MemberRecord,
    MethodMember,
    Module,
    ParamRecord,
    PropertyMember,
    SchemaMismatchError,
)
from extdts.registry.registry import ClassRegistry, load_class_records

__all__ = [
    "ClassRecord",
    "ClassRegistry",
    "ConfigMember",
    "EnumInfo",
    "MemberRecord",
    "MethodMember",
    "Module",
    "ParamRecord",
    "PropertyMember",
    "SchemaMismatchError",
    "load_class_records",
]
