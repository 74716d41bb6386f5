"""JSDuck runner: produces the per-class JSON export consumed by the registry."""

from __future__ import annotations

import logging
import shlex
import shutil
from pathlib import Path

from extdts.toolchain.models import ToolchainError
from extdts.toolchain.process import run_tool

logger = logging.getLogger(__name__)


def run_jsduck(
    source_dir: str | Path,
    output_dir: str | Path,
    *,
    executable: str = "jsduck",
    extra: str = "",
    timeout: int = 600,
) -> bool:
    """Export full JSDuck documentation for *source_dir* into *output_dir*.

    Returns False without running when *output_dir* already exists.
    """
    output_dir = Path(output_dir)
    if output_dir.exists():
        logger.info("jsduck skipped; %s exists", output_dir)
        return False

    output_dir.mkdir(parents=True)
    args = [
        executable,
        str(source_dir),
        *shlex.split(extra),
        "--export=full",
        "--output",
        str(output_dir),
    ]
    result = run_tool("jsduck", "export", args, timeout)
    if not result.ok:
        # a partial export must not satisfy the exists check above
        shutil.rmtree(output_dir, ignore_errors=True)
        raise ToolchainError("jsduck", "export", result.output[:500], returncode=result.returncode)
    return True
