"""Buffered bulk writer for one index."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from elasticsearch import ApiError, TransportError

from repocatalog.domain.indexing import ClusterError, ClusterNotAcknowledgedError

from .schema import DOCUMENT_TYPE_FIELD

if TYPE_CHECKING:
    from types import TracebackType

    from elasticsearch import Elasticsearch

    from repocatalog.domain.ports import IndexDocument

log = getLogger(__name__)

DEFAULT_BATCH_SIZE = 500
_MAX_REPORTED_FAILURES = 3


def document_key(document: IndexDocument) -> str:
    """``_id`` of ``document``; ids are only unique per document type."""

    return f"{document.document_type.value}:{document.id}"


class BulkDocumentWriter:
    def __init__(
        self,
        client: Elasticsearch,
        index: str,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.client = client
        self.index = index
        self.batch_size = batch_size
        self.written = 0
        self._buffer: list[IndexDocument] = []
        self._closed = False

    def write(self, document: IndexDocument) -> None:
        if self._closed:
            raise RuntimeError(f"Writer for '{self.index}' is closed")
        self._buffer.append(document)
        if len(self._buffer) >= self.batch_size:
            self.flush()

    def flush(self) -> None:
        if not self._buffer:
            return
        batch, self._buffer = self._buffer, []
        operations: list[dict[str, Any]] = []
        for document in batch:
            operations.append({"index": {"_index": self.index, "_id": document_key(document)}})
            operations.append({**document.source, DOCUMENT_TYPE_FIELD: document.document_type.value})

        try:
            response = self.client.bulk(operations=operations)
        except (ApiError, TransportError) as exc:
            raise ClusterError(f"Bulk write to '{self.index}' failed: {exc}") from exc

        body = getattr(response, "body", response)
        if body.get("errors"):
            failures = [
                result["index"]
                for result in body.get("items", [])
                if "error" in result.get("index", {})
            ]
            detail = f"{len(failures)} of {len(batch)} documents rejected: " + "; ".join(
                f"{failure.get('_id')}: {failure['error']}"
                for failure in failures[:_MAX_REPORTED_FAILURES]
            )
            raise ClusterNotAcknowledgedError("bulk", self.index, detail)

        self.written += len(batch)
        log.debug("Flushed %s documents to '%s' (%s total)", len(batch), self.index, self.written)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.flush()

    def __enter__(self) -> BulkDocumentWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
            return
        self._buffer.clear()
        self._closed = True
