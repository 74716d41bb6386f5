"""Output subsystem: writes .d.ts declaration files."""

from extdts.output.writer import DeclarationWriter

__all__ = [
    "DeclarationWriter",
]
