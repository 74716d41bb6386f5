"""Subprocess helper shared by the external tool runners."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from extdts.toolchain.models import CheckResult, ToolchainError

logger = logging.getLogger(__name__)


def run_tool(tool: str, stage: str, args: Sequence[str], timeout: int) -> CheckResult:
    """Run *args*, returning its result. Missing executables and timeouts raise."""
    logger.debug("running %s", " ".join(args))
    try:
        result = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise ToolchainError(tool, stage, f"executable not found: {args[0]}", cause=e) from e
    except subprocess.TimeoutExpired as e:
        raise ToolchainError(tool, stage, f"timed out after {timeout}s", cause=e) from e

    output = (result.stdout or "") + (result.stderr or "")
    if result.returncode != 0:
        logger.warning("%s exited %d: %s", tool, result.returncode, output[:200])
    return CheckResult(ok=result.returncode == 0, returncode=result.returncode, output=output)
