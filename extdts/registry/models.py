"""Pydantic models for JSDuck ``--export=full`` class records.

There is no official schema for this format; the models describe the subset
the declaration emitter reads. Unknown keys are ignored and JSON ``null``
falls back to the field default.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MEMBER_KINDS: tuple[str, ...] = ("property", "method", "cfg")


class SchemaMismatchError(Exception):
    """A documentation record that cannot be read as a JSDuck class export."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ParamRecord(_Record):
    """A method parameter, return value, or callback property."""

    name: str
    type: str = "Object"
    optional: bool = False
    properties: tuple[ParamRecord, ...] | None = None
    short_doc: str = ""


class _MemberBase(_Record):
    name: str
    owner: str = ""
    private: bool = False
    protected: bool = False
    static: bool = False
    short_doc: str = ""


class PropertyMember(_MemberBase):
    tagname: Literal["property"] = "property"
    type: str = "Object"
    optional: bool = False


class ConfigMember(_MemberBase):
    tagname: Literal["cfg"] = "cfg"
    type: str = "Object"
    optional: bool = False
    required: bool = False


class MethodMember(_MemberBase):
    tagname: Literal["method"] = "method"
    params: tuple[ParamRecord, ...] = ()
    returns: ParamRecord | None = Field(default=None, alias="return")

    @property
    def is_constructor(self) -> bool:
        return self.name == "constructor"


MemberRecord = Annotated[
    Union[PropertyMember, MethodMember, ConfigMember],
    Field(discriminator="tagname"),
]


class EnumInfo(_Record):
    type: str


class ClassRecord(_Record):
    """One documented class, as exported by JSDuck."""

    name: str = Field(min_length=1)
    aliases: tuple[str, ...] = Field(default=(), alias="alternateClassNames")
    parent: str = Field(default="", alias="extends")
    singleton: bool = False
    members: tuple[MemberRecord, ...] = ()
    mixins: tuple[str, ...] = ()
    enum: EnumInfo | None = None
    short_doc: str = ""

    @field_validator("members", mode="before")
    @classmethod
    def _drop_unsupported_members(cls, v: Any) -> Any:
        # events and css vars/mixins have no declaration form
        if isinstance(v, (list, tuple)):
            return [
                m for m in v
                if not isinstance(m, dict) or m.get("tagname") in MEMBER_KINDS
            ]
        return v

    @property
    def base_name(self) -> str:
        return self.name[self.name.rfind(".") + 1:]

    @property
    def module_name(self) -> str:
        return self.name[: max(self.name.rfind("."), 0)]


@dataclass(frozen=True)
class Module:
    """Classes sharing a dotted prefix; emitted as one namespace."""

    name: str
    classes: tuple[ClassRecord, ...] = ()
