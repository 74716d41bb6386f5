from pydantic import BaseModel, Field
from typing import Literal


class ExtVersionConfig(BaseModel):
    name: str
    folder: str
    url: str
    jsduck_extra: str = ""
    doc_url: str = "http://docs.sencha.com/extjs/4.2.5/#!/api/"


def _default_versions() -> list[ExtVersionConfig]:
    return [
        ExtVersionConfig(
            name="ExtJS-4.2.1.883",
            folder="ext-4.2.1.883",
            url="http://cdn.sencha.com/ext/gpl/ext-4.2.1-gpl.zip",
            doc_url="http://docs.sencha.com/extjs/4.2.5/#!/api/",
        )
    ]


class RegistryConfig(BaseModel):
    class_prefix: str = Field(default="Ext.", min_length=1)
    detached_parents: list[str] = Field(default_factory=lambda: ["Ext.Error"])


class EmitterConfig(BaseModel):
    doc_url: str = "http://docs.sencha.com/extjs/4.2.5/#!/api/"
    project_url: str = "https://github.com/Dretch/typescript-declarations-for-ext"
    alias_prefix: str = Field(default="__", min_length=1)


class OutputConfig(BaseModel):
    base_dir: str = "build"


class ToolchainConfig(BaseModel):
    jsduck: str = "jsduck"
    tsc_command: list[str] = Field(default_factory=lambda: ["npx", "tsc", "--noEmit"])
    tsfmt_command: list[str] = Field(default_factory=lambda: ["npx", "tsfmt", "-r"])
    format_output: bool = True
    timeout: int = Field(default=600, gt=0)
    download_timeout: float = Field(default=120.0, gt=0)


class ExtDtsConfig(BaseModel):
    versions: list[ExtVersionConfig] = Field(default_factory=_default_versions)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    emitter: EmitterConfig = Field(default_factory=EmitterConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
