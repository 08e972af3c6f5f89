"""Fakes for the catalog side of publishing and identity lookups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from repocatalog.domain.model import get_repositories

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from repocatalog.domain.model import CanonicalFile, Repository
    from repocatalog.domain.ports import IdentityKind


@dataclass
class ListPublicationSource:
    """Publication source over in-memory files; counts how often files are read."""

    files: list[CanonicalFile] = field(default_factory=list["CanonicalFile"])
    repositories: tuple[Repository, ...] = field(default_factory=get_repositories)
    on_file: Callable[[CanonicalFile], None] | None = None
    reads: int = 0

    def iter_repositories(self) -> Iterable[Repository]:
        return self.repositories

    def iter_files(self) -> Iterator[CanonicalFile]:
        self.reads += 1
        for file in self.files:
            if self.on_file is not None:
                self.on_file(file)
            yield file


@dataclass
class RecordingIdentityService:
    """Issue sequential ids and remember every request."""

    requests: list[tuple[IdentityKind, str]] = field(
        default_factory=list["tuple[IdentityKind, str]"]
    )

    def ensure_id(self, kind: IdentityKind, business_key: str) -> str:
        self.requests.append((kind, business_key))
        return f"{kind.value}-{len(self.requests)}"
