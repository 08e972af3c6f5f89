"""In-memory search cluster honouring the ``SearchCluster`` port."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from repocatalog.domain.indexing import ClusterError, ClusterNotAcknowledgedError
from repocatalog.domain.ports import Acknowledgement, AliasActionKind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from repocatalog.domain.ports import (
        CreateIndexRequest,
        DeleteIndexRequest,
        IndexDocument,
        PutMappingRequest,
        UpdateAliasesRequest,
    )


@dataclass
class FakeDocumentWriter:
    cluster: FakeSearchCluster
    index: str
    buffer: list[IndexDocument] = field(default_factory=list["IndexDocument"])
    closed: bool = False

    def write(self, document: IndexDocument) -> None:
        if self.cluster.fail_writes_after is not None and (
            self.cluster.writes >= self.cluster.fail_writes_after
        ):
            raise ClusterNotAcknowledgedError("bulk", self.index, "simulated rejection")
        self.cluster.writes += 1
        self.buffer.append(document)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        stored = self.cluster.documents.setdefault(self.index, {})
        for document in self.buffer:
            stored[f"{document.document_type}:{document.id}"] = document
        self.buffer.clear()

    def __enter__(self) -> FakeDocumentWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()


@dataclass
class FakeSearchCluster:
    """Indices with their aliases plus the documents written to them.

    ``unacknowledged`` names operations answered with ``acknowledged=False``;
    ``failing_deletes`` names indices whose deletion raises ``ClusterError``.
    """

    indices: dict[str, set[str]] = field(default_factory=dict["str", "set[str]"])
    documents: dict[str, dict[str, IndexDocument]] = field(
        default_factory=dict["str", "dict[str, IndexDocument]"]
    )
    settings: dict[str, Mapping[str, object]] = field(
        default_factory=dict["str", "Mapping[str, object]"]
    )
    mappings: dict[str, list[PutMappingRequest]] = field(
        default_factory=dict["str", "list[PutMappingRequest]"]
    )
    alias_requests: list[UpdateAliasesRequest] = field(
        default_factory=list["UpdateAliasesRequest"]
    )
    deleted: list[str] = field(default_factory=list["str"])
    unacknowledged: set[str] = field(default_factory=set["str"])
    failing_deletes: set[str] = field(default_factory=set["str"])
    fail_writes_after: int | None = None
    count_offset: int = 0
    writes: int = 0

    def add_index(self, name: str, *aliases: str) -> None:
        self.indices[name] = set(aliases)

    def alias_targets(self, alias: str) -> list[str]:
        return sorted(name for name, aliases in self.indices.items() if alias in aliases)

    def _ack(self, operation: str, target: str) -> Acknowledgement:
        return Acknowledgement(
            operation=operation,
            target=target,
            acknowledged=operation not in self.unacknowledged,
        )

    def create_index(self, request: CreateIndexRequest) -> Acknowledgement:
        if request.index in self.indices:
            raise ClusterError(f"resource_already_exists_exception: {request.index}")
        self.indices[request.index] = set()
        self.settings[request.index] = request.settings
        return self._ack("create_index", request.index)

    def put_mapping(self, request: PutMappingRequest) -> Acknowledgement:
        self.mappings.setdefault(request.index, []).append(request)
        return self._ack("put_mapping", f"{request.index}/{request.document_type}")

    def update_aliases(self, request: UpdateAliasesRequest) -> Acknowledgement:
        self.alias_requests.append(request)
        acknowledgement = self._ack("update_aliases", "aliases")
        if not acknowledgement.acknowledged:
            return acknowledgement
        for action in request.actions:
            if action.index not in self.indices:
                raise ClusterError(f"index_not_found_exception: {action.index}")
        for action in request.actions:
            if action.kind is AliasActionKind.REMOVE:
                self.indices[action.index].discard(action.alias)
            else:
                self.indices[action.index].add(action.alias)
        return acknowledgement

    def delete_index(self, request: DeleteIndexRequest) -> Acknowledgement:
        for name in request.indices:
            if name in self.failing_deletes:
                raise ClusterError(f"simulated failure deleting {name}")
        acknowledgement = self._ack("delete_index", ",".join(request.indices))
        if acknowledgement.acknowledged:
            for name in request.indices:
                self.indices.pop(name, None)
                self.documents.pop(name, None)
                self.deleted.append(name)
        return acknowledgement

    def list_indices(self) -> Mapping[str, frozenset[str]]:
        return {name: frozenset(aliases) for name, aliases in self.indices.items()}

    def open_writer(self, index: str) -> FakeDocumentWriter:
        return FakeDocumentWriter(self, index)

    def refresh(self, index: str) -> None:
        if index not in self.indices:
            raise ClusterError(f"index_not_found_exception: {index}")

    def count(self, index: str) -> int:
        return len(self.documents.get(index, {})) + self.count_offset
