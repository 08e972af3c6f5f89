"""Combiners for composite attribute groups of a file.

Every attribute of a composite is chosen on its own: the first non-null value
in priority order wins. A reference genome may therefore take its build from
one source and its reference name from another.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from repocatalog.domain.model import (
    AnalysisMethod,
    DataBundle,
    DataCategorization,
    ReferenceGenome,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def first_non_null[T](values: Iterable[T | None]) -> T | None:
    """Return the first value that is not ``None``."""

    for value in values:
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class SubfieldCombiner[TComposite]:
    """Combine ordered, optional composites of one dataclass type."""

    composite_type: type[TComposite]

    def combine(self, values: Sequence[TComposite | None]) -> TComposite:
        present = [value for value in values if value is not None]
        attributes: dict[str, Any] = {
            attribute.name: first_non_null(getattr(value, attribute.name) for value in present)
            for attribute in fields(self.composite_type)  # pyright: ignore[reportArgumentType]
        }
        return self.composite_type(**attributes)


@dataclass(frozen=True, slots=True)
class SubfieldCombiners:
    """The combiner set used by ``RecordCombiner``."""

    data_bundle: SubfieldCombiner[DataBundle] = field(
        default_factory=lambda: SubfieldCombiner(DataBundle)
    )
    analysis_method: SubfieldCombiner[AnalysisMethod] = field(
        default_factory=lambda: SubfieldCombiner(AnalysisMethod)
    )
    data_categorization: SubfieldCombiner[DataCategorization] = field(
        default_factory=lambda: SubfieldCombiner(DataCategorization)
    )
    reference_genome: SubfieldCombiner[ReferenceGenome] = field(
        default_factory=lambda: SubfieldCombiner(ReferenceGenome)
    )
