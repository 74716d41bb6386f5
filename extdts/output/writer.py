"""DeclarationWriter: writes generated declaration text to disk."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from extdts.config.models import OutputConfig

logger = logging.getLogger(__name__)


def _sanitize_version_name(name: str) -> str:
    """Make a version name safe for use as a directory and file name."""
    name = name.replace("/", "-").replace("..", "")
    name = re.sub(r"[^\w\-\.]", "", name)
    if not name or name.strip(".") == "":
        name = "_unnamed"
    return name


class DeclarationWriter:
    """Writes ``<base_dir>/<name>/<name>.d.ts`` files, honouring dry-run mode."""

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.base_dir)

    def declaration_path(self, name: str) -> Path:
        safe_name = _sanitize_version_name(name)
        return self.base_dir / safe_name / f"{safe_name}.d.ts"

    def write(self, text: str, name: str, *, dry_run: bool = False) -> Path:
        """Write declaration *text* for version *name*.

        Returns the Path of the written (or would-be) file.
        """
        dest = self.declaration_path(name)
        return self.write_to(text, dest, dry_run=dry_run)

    def write_to(self, text: str, dest: str | Path, *, dry_run: bool = False) -> Path:
        dest = Path(dest)
        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
        logger.info("wrote %s (%d bytes)", dest, len(text.encode("utf-8")))
        return dest
