"""Collector for non-fatal emission diagnostics."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from extdts.emitter.models import Diagnostic, DiagnosticKind

logger = logging.getLogger(__name__)


def count_by_kind(diagnostics: Iterable[Diagnostic]) -> Counter[str]:
    return Counter(d.kind for d in diagnostics)


class DiagnosticSink:
    """Logs each diagnostic as a warning and keeps it for later reporting."""

    def __init__(self) -> None:
        self.items: list[Diagnostic] = []

    def warn(self, kind: DiagnosticKind, subject: str, message: str) -> None:
        logger.warning("%s: %s (%s)", kind, message, subject)
        self.items.append(Diagnostic(kind=kind, subject=subject, message=message))

    def __len__(self) -> int:
        return len(self.items)
