"""Port for the search cluster that hosts index generations.

Every admin operation takes an explicit request value and returns an
``Acknowledgement``; callers decide what an unacknowledged result means.
Transport failures are raised by adapters as ``ClusterError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from repocatalog.domain.model import DocumentType


@dataclass(frozen=True, slots=True)
class Acknowledgement:
    operation: str
    target: str
    acknowledged: bool


@dataclass(frozen=True, slots=True)
class CreateIndexRequest:
    index: str
    settings: Mapping[str, object] = field(default_factory=dict["str", "object"])


@dataclass(frozen=True, slots=True)
class PutMappingRequest:
    index: str
    document_type: DocumentType
    mapping: Mapping[str, object]


class AliasActionKind(StrEnum):
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class AliasAction:
    kind: AliasActionKind
    index: str
    alias: str


@dataclass(frozen=True, slots=True)
class UpdateAliasesRequest:
    """All actions are applied by the cluster as one atomic metadata change."""

    actions: tuple[AliasAction, ...]


@dataclass(frozen=True, slots=True)
class DeleteIndexRequest:
    indices: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class IndexDocument:
    document_type: DocumentType
    id: str
    source: Mapping[str, object]


@runtime_checkable
class DocumentWriter(Protocol):
    """Buffered bulk writer bound to one index.

    ``close`` flushes outstanding documents and raises if any write failed.
    """

    def write(self, document: IndexDocument) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> DocumentWriter: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool | None: ...


@runtime_checkable
class SearchCluster(Protocol):
    """Index administration and document loading."""

    def create_index(self, request: CreateIndexRequest) -> Acknowledgement: ...

    def put_mapping(self, request: PutMappingRequest) -> Acknowledgement: ...

    def update_aliases(self, request: UpdateAliasesRequest) -> Acknowledgement: ...

    def delete_index(self, request: DeleteIndexRequest) -> Acknowledgement: ...

    def list_indices(self) -> Mapping[str, frozenset[str]]:
        """Return every index name with the aliases it currently holds."""
        ...

    def open_writer(self, index: str) -> DocumentWriter: ...

    def refresh(self, index: str) -> None: ...

    def count(self, index: str) -> int: ...
