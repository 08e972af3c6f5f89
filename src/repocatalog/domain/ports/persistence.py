"""Ports for persisting and reading the canonical catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from repocatalog.domain.model import CanonicalFile, Repository


@runtime_checkable
class CanonicalFileRepository(Protocol):
    """Persistence contract for canonical files."""

    def add(self, file: CanonicalFile) -> None: ...

    def add_all(self, files: Iterable[CanonicalFile]) -> int: ...

    def clear(self) -> int: ...

    def count(self) -> int: ...

    def iter_files(self) -> Iterator[CanonicalFile]:
        """Stream every stored file once, in insertion order."""
        ...


@runtime_checkable
class PublicationSource(Protocol):
    """Everything a new index generation is built from.

    ``iter_files`` is a single-pass cursor and is read once per publish.
    """

    def iter_repositories(self) -> Iterable[Repository]: ...

    def iter_files(self) -> Iterator[CanonicalFile]: ...
