"""Models for the external toolchain subsystem."""

from __future__ import annotations

from pydantic import BaseModel, Field

from extdts.emitter.models import Diagnostic


class ToolchainError(Exception):
    """Wraps failures of external tools and downloads with context."""

    def __init__(
        self,
        tool: str,
        stage: str,
        detail: str,
        returncode: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.tool = tool
        self.stage = stage
        self.returncode = returncode
        super().__init__(f"{tool} {stage} failed: {detail}")
        if cause is not None:
            self.__cause__ = cause


class CheckResult(BaseModel):
    """Outcome of running an external checker or formatter."""

    ok: bool
    returncode: int
    output: str = ""


class GenerationResult(BaseModel):
    """Declaration text generated from one JSDuck export."""

    text: str
    class_count: int
    module_count: int
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class BuildReport(BaseModel):
    """Summary of a full build for one Ext version."""

    version: str
    declaration_path: str
    class_count: int = 0
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    checked: bool = False
    formatted: bool = False
