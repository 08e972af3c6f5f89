"""Deterministic ordering of source files by the repository that reported them.

The order is strict and total:

1. sources named in ``ranking`` come first, in the given order
2. every other source follows in ``RepositorySource`` declaration order
3. files from the same source are ordered by a canonical JSON fingerprint

Step 3 makes the result independent of the iteration order of the input even
when one source reports the same object twice.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Final

from repocatalog.domain.model import RepositorySource

if TYPE_CHECKING:
    from collections.abc import Iterable

    from repocatalog.domain.model import SourceFile

# PCAWG carries the most information of all sources.
DEFAULT_RANKING: Final[tuple[RepositorySource, ...]] = (RepositorySource.PCAWG,)

_ORDINALS: Final[dict[RepositorySource, int]] = {
    source: ordinal for ordinal, source in enumerate(RepositorySource)
}

type SourceRank = tuple[int, int, str]
type PriorityKey = tuple[int, int, str, str]


@dataclass(frozen=True, slots=True)
class SourcePriorityOrder:
    """Strict total order over sources and the files they report."""

    ranking: tuple[RepositorySource, ...] = DEFAULT_RANKING

    def __post_init__(self) -> None:
        if len(set(self.ranking)) != len(self.ranking):
            raise ValueError(f"Duplicate sources in ranking: {self.ranking}")

    def rank(self, source: RepositorySource) -> SourceRank:
        position = self.ranking.index(source) if source in self.ranking else len(self.ranking)
        return position, _ORDINALS[source], source.value

    def key(self, file: SourceFile) -> PriorityKey:
        return (*self.rank(file.source), fingerprint(file))

    def prioritize(self, files: Iterable[SourceFile]) -> list[SourceFile]:
        """Return ``files`` sorted highest priority first."""

        return sorted(files, key=self.key)


def fingerprint(file: SourceFile) -> str:
    """Canonical JSON rendering of ``file`` used as the final tie-break."""

    return json.dumps(asdict(file), sort_keys=True, default=str, separators=(",", ":"))
