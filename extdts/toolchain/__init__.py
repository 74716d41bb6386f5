"""External toolchain subsystem: fetch, JSDuck export, tsc/tsfmt gate."""

from extdts.toolchain.checker import check_declarations, format_declarations
from extdts.toolchain.fetch import download_distribution, extract_distribution
from extdts.toolchain.jsduck import run_jsduck
from extdts.toolchain.models import BuildReport, CheckResult, GenerationResult, ToolchainError
from extdts.toolchain.pipeline import build_version, generate_declarations

__all__ = [
    "BuildReport",
    "CheckResult",
    "GenerationResult",
    "ToolchainError",
    "build_version",
    "check_declarations",
    "download_distribution",
    "extract_distribution",
    "format_declarations",
    "generate_declarations",
    "run_jsduck",
]
