"""Reconciliation of per-source file descriptions into canonical files.

Flow:
1) order each group of source files by source priority
2) select scalar fields and report disagreements
3) combine composite attribute groups field by field
4) union file copies, donors and studies
5) stream the canonical files lazily to persistence
"""

from __future__ import annotations

from .combine import InvalidInputError, RecordCombiner
from .diagnostics import (
    CollectingDiagnostics,
    DiagnosticsSink,
    FieldDisagreement,
    LoggingDiagnostics,
)
from .priority import DEFAULT_RANKING, SourcePriorityOrder
from .stream import CatalogStream, InvalidGroupPolicy
from .subfields import SubfieldCombiner, SubfieldCombiners, first_non_null

__all__ = [
    "DEFAULT_RANKING",
    "CatalogStream",
    "CollectingDiagnostics",
    "DiagnosticsSink",
    "FieldDisagreement",
    "InvalidGroupPolicy",
    "InvalidInputError",
    "LoggingDiagnostics",
    "RecordCombiner",
    "SourcePriorityOrder",
    "SubfieldCombiner",
    "SubfieldCombiners",
    "first_non_null",
]
