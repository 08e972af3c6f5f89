"""Diagnostics emitted while combining source files.

Disagreements are informational: they are reported to a sink and never stop
a merge.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from repocatalog.domain.model import SourceFile

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldDisagreement:
    """Distinct non-null values observed for one scalar field across a group."""

    field_name: str
    values: tuple[object, ...]
    files: tuple[SourceFile, ...]

    def describe_files(self) -> str:
        return ", ".join(f"{file.source}:{file.id or file.object_id or '?'}" for file in self.files)


class DiagnosticsSink(Protocol):
    """Receives disagreements found by the record combiner."""

    def report_disagreement(self, disagreement: FieldDisagreement) -> None: ...


@dataclass(slots=True)
class LoggingDiagnostics:
    """Log every disagreement as a warning and count them per field."""

    logger: logging.Logger = field(default=log)
    counts: Counter[str] = field(default_factory=Counter["str"])
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def report_disagreement(self, disagreement: FieldDisagreement) -> None:
        self.logger.warning(
            "Found %s distinct values %s for field '%s' of files [%s]",
            len(disagreement.values),
            list(disagreement.values),
            disagreement.field_name,
            disagreement.describe_files(),
        )
        with self._lock:
            self.counts[disagreement.field_name] += 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())


@dataclass(slots=True)
class CollectingDiagnostics:
    """Keep disagreements in memory; used by tests and dry runs."""

    disagreements: list[FieldDisagreement] = field(default_factory=list["FieldDisagreement"])

    def report_disagreement(self, disagreement: FieldDisagreement) -> None:
        self.disagreements.append(disagreement)

    def for_field(self, field_name: str) -> list[FieldDisagreement]:
        return [item for item in self.disagreements if item.field_name == field_name]
