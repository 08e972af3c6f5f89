"""Merge the source files of one logical object into a canonical file.

Callers group source files by object identity before combining; the combiner
trusts that grouping and never splits a group.

Merge rules, applied to the group sorted by ``SourcePriorityOrder``:
- scalar fields (``id``, ``object_id``, ``access``): first non-null value,
  reporting a disagreement when more than one distinct non-null value exists
- composites: delegated to ``SubfieldCombiners``
- ``file_copies``: concatenated, copies are independently meaningful
- ``donors``: concatenated, first occurrence per donor identity wins
- ``studies``: concatenated, first appearance wins
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from repocatalog.domain.model import CanonicalFile

from .diagnostics import DiagnosticsSink, FieldDisagreement, LoggingDiagnostics
from .priority import SourcePriorityOrder
from .subfields import SubfieldCombiners, first_non_null

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterable, Sequence

    from repocatalog.domain.model import Donor, FileCopy, SourceFile


class InvalidInputError(ValueError):
    """Raised when a group of source files cannot be combined."""


@dataclass(slots=True)
class RecordCombiner:
    """Combine a group of source files describing the same object."""

    priority: SourcePriorityOrder = field(default_factory=SourcePriorityOrder)
    subfields: SubfieldCombiners = field(default_factory=SubfieldCombiners)
    diagnostics: DiagnosticsSink = field(default_factory=LoggingDiagnostics)

    def combine(self, files: Collection[SourceFile]) -> CanonicalFile:
        if not files:
            raise InvalidInputError("Cannot combine an empty group of source files")

        prioritized = self.priority.prioritize(files)
        group = tuple(prioritized)

        return CanonicalFile(
            id=self._select(group, "id", lambda file: file.id),
            object_id=self._select(group, "object_id", lambda file: file.object_id),
            access=self._select(group, "access", lambda file: file.access),
            studies=_unique(study for file in prioritized for study in file.studies),
            data_bundle=self.subfields.data_bundle.combine(
                [file.data_bundle for file in prioritized]
            ),
            analysis_method=self.subfields.analysis_method.combine(
                [file.analysis_method for file in prioritized]
            ),
            data_categorization=self.subfields.data_categorization.combine(
                [file.data_categorization for file in prioritized]
            ),
            reference_genome=self.subfields.reference_genome.combine(
                [file.reference_genome for file in prioritized]
            ),
            file_copies=_all_file_copies(prioritized),
            donors=_unique_donors(prioritized),
        )

    def _select[T](
        self,
        group: tuple[SourceFile, ...],
        field_name: str,
        getter: Callable[[SourceFile], T | None],
    ) -> T | None:
        values = [getter(file) for file in group]
        self._analyze(group, field_name, values)
        return first_non_null(values)

    def _analyze(
        self,
        group: tuple[SourceFile, ...],
        field_name: str,
        values: Sequence[object | None],
    ) -> None:
        distinct = _unique(value for value in values if value is not None)
        if len(distinct) > 1:
            self.diagnostics.report_disagreement(
                FieldDisagreement(field_name=field_name, values=tuple(distinct), files=group)
            )


def _unique[T](values: Iterable[T]) -> list[T]:
    seen: set[T] = set()
    unique: list[T] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def _all_file_copies(files: Sequence[SourceFile]) -> list[FileCopy]:
    return [copy for file in files for copy in file.file_copies]


def _unique_donors(files: Sequence[SourceFile]) -> list[Donor]:
    seen: set[tuple[str, ...]] = set()
    donors: list[Donor] = []
    for file in files:
        for donor in file.donors:
            identity = donor.identity
            if identity is not None:
                if identity in seen:
                    continue
                seen.add(identity)
            donors.append(donor)
    return donors
