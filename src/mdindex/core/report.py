"""Diagnostics collected over one ingest pass"""

import logging
from dataclasses import dataclass, field
from typing import Any

from mdindex.core.errors import IngestError


logger = logging.getLogger(__name__)

STATUSES = ('created', 'updated', 'unchanged', 'removed', 'rejected')


@dataclass(frozen=True)
class Diagnostic:
    """One malformed document: where, what kind, and a readable message."""
    source:  str
    kind:    str
    message: str


@dataclass
class IngestReport:
    """Accumulates per-document outcomes without stopping the batch."""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=lambda: dict.fromkeys(STATUSES, 0))

    def record(self, status: str) -> None:
        self.counts[status] += 1

    def reject(self, error: IngestError) -> None:
        """Log and store a diagnostic for a document that stays out of the index."""
        logger.warning("rejected %s (%s): %s", error.source, error.kind, error.message)
        self.diagnostics.append(Diagnostic(error.source, error.kind, error.message))
        self.counts['rejected'] += 1

    @property
    def valid(self) -> int:
        """Documents accepted in this batch."""
        return self.counts['created'] + self.counts['updated'] + self.counts['unchanged']

    @property
    def status(self) -> str:
        if self.diagnostics and not self.valid:
            return 'failed'
        if self.diagnostics:
            return 'partial'
        if not self.valid and not self.counts['removed']:
            return 'empty'
        return 'ok'

    @property
    def failed(self) -> bool:
        return self.status == 'failed'

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "counts": dict(self.counts),
            "diagnostics": [
                {"source": d.source, "kind": d.kind, "message": d.message}
                for d in sorted(self.diagnostics, key=lambda d: d.source)
            ],
        }
