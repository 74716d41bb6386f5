"""Post-generation gate: type-check and format the emitted declarations."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from extdts.toolchain.models import CheckResult
from extdts.toolchain.process import run_tool

logger = logging.getLogger(__name__)

REFERENCE_FILE = "test.ts"


def write_reference_file(decl_path: str | Path) -> Path:
    """Write a sibling ``test.ts`` that references *decl_path*."""
    decl_path = Path(decl_path)
    test_file = decl_path.parent / REFERENCE_FILE
    test_file.write_text(f'/// <reference path="{decl_path.name}" />\n', encoding="utf-8")
    return test_file


def check_declarations(
    decl_path: str | Path, command: Sequence[str], timeout: int = 600
) -> CheckResult:
    """Run the TypeScript compiler over a file referencing *decl_path*."""
    test_file = write_reference_file(decl_path)
    result = run_tool("tsc", "check", [*command, str(test_file)], timeout)
    if result.ok:
        logger.info("tsc accepted %s", decl_path)
    return result


def format_declarations(
    decl_path: str | Path, command: Sequence[str], timeout: int = 600
) -> CheckResult:
    """Format *decl_path* in place."""
    return run_tool("tsfmt", "format", [*command, str(decl_path)], timeout)
