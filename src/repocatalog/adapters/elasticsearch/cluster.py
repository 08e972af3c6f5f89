"""``SearchCluster`` backed by the official Elasticsearch client."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Any

from elasticsearch import ApiError, Elasticsearch, TransportError

from repocatalog.domain.indexing import ClusterError
from repocatalog.domain.ports import Acknowledgement

from .writer import DEFAULT_BATCH_SIZE, BulkDocumentWriter

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from repocatalog.config import SearchConfig
    from repocatalog.domain.ports import (
        CreateIndexRequest,
        DeleteIndexRequest,
        PutMappingRequest,
        UpdateAliasesRequest,
    )

log = getLogger(__name__)


def create_client(config: SearchConfig) -> Elasticsearch:
    return Elasticsearch(
        config.url,
        api_key=config.api_key,
        request_timeout=config.request_timeout,
    )


@contextmanager
def _cluster_errors(operation: str, target: str) -> Iterator[None]:
    try:
        yield
    except (ApiError, TransportError) as exc:
        raise ClusterError(f"{operation} of '{target}' failed: {exc}") from exc


def _body(response: Any) -> Any:
    return getattr(response, "body", response)


def _acknowledgement(operation: str, target: str, response: Any) -> Acknowledgement:
    acknowledged = bool(_body(response).get("acknowledged", False))
    if not acknowledged:
        log.warning("Cluster did not acknowledge %s of '%s'", operation, target)
    return Acknowledgement(operation=operation, target=target, acknowledged=acknowledged)


class ElasticsearchCluster:
    def __init__(self, client: Elasticsearch, *, bulk_batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self.client = client
        self.bulk_batch_size = bulk_batch_size

    @classmethod
    def from_config(cls, config: SearchConfig) -> ElasticsearchCluster:
        return cls(create_client(config), bulk_batch_size=config.bulk_batch_size)

    def create_index(self, request: CreateIndexRequest) -> Acknowledgement:
        with _cluster_errors("create_index", request.index):
            response = self.client.indices.create(
                index=request.index, settings=dict(request.settings)
            )
        return _acknowledgement("create_index", request.index, response)

    def put_mapping(self, request: PutMappingRequest) -> Acknowledgement:
        target = f"{request.index}/{request.document_type}"
        mapping = dict(request.mapping)
        with _cluster_errors("put_mapping", target):
            response = self.client.indices.put_mapping(
                index=request.index,
                properties=mapping.get("properties"),
                dynamic=mapping.get("dynamic"),
            )
        return _acknowledgement("put_mapping", target, response)

    def update_aliases(self, request: UpdateAliasesRequest) -> Acknowledgement:
        target = ",".join(sorted({action.alias for action in request.actions}))
        actions = [
            {action.kind.value: {"index": action.index, "alias": action.alias}}
            for action in request.actions
        ]
        with _cluster_errors("update_aliases", target):
            response = self.client.indices.update_aliases(actions=actions)
        return _acknowledgement("update_aliases", target, response)

    def delete_index(self, request: DeleteIndexRequest) -> Acknowledgement:
        target = ",".join(request.indices)
        with _cluster_errors("delete_index", target):
            response = self.client.indices.delete(index=list(request.indices))
        return _acknowledgement("delete_index", target, response)

    def list_indices(self) -> Mapping[str, frozenset[str]]:
        with _cluster_errors("get_alias", "*"):
            response = self.client.indices.get_alias(index="*")
        return {
            name: frozenset(entry.get("aliases", {}))
            for name, entry in _body(response).items()
        }

    def open_writer(self, index: str) -> BulkDocumentWriter:
        return BulkDocumentWriter(self.client, index, batch_size=self.bulk_batch_size)

    def refresh(self, index: str) -> None:
        with _cluster_errors("refresh", index):
            self.client.indices.refresh(index=index)

    def count(self, index: str) -> int:
        with _cluster_errors("count", index):
            response = self.client.count(index=index)
        return int(_body(response)["count"])
