"""Elasticsearch adapter for publishing index generations."""

from __future__ import annotations

from .cluster import ElasticsearchCluster, create_client
from .schema import DOCUMENT_TYPE_FIELD, MAPPINGS, SETTINGS, default_schema
from .writer import BulkDocumentWriter, document_key

__all__ = [
    "DOCUMENT_TYPE_FIELD",
    "MAPPINGS",
    "SETTINGS",
    "BulkDocumentWriter",
    "ElasticsearchCluster",
    "create_client",
    "default_schema",
    "document_key",
]
