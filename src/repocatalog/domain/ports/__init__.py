"""Ports implemented by adapters."""

from __future__ import annotations

from .identity import IdentityKind, IdentityService
from .persistence import CanonicalFileRepository, PublicationSource
from .search import (
    Acknowledgement,
    AliasAction,
    AliasActionKind,
    CreateIndexRequest,
    DeleteIndexRequest,
    DocumentWriter,
    IndexDocument,
    PutMappingRequest,
    SearchCluster,
    UpdateAliasesRequest,
)
from .unit_of_work import CatalogRepositories, CatalogUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "Acknowledgement",
    "AliasAction",
    "AliasActionKind",
    "CanonicalFileRepository",
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "CreateIndexRequest",
    "DeleteIndexRequest",
    "DocumentWriter",
    "IdentityKind",
    "IdentityService",
    "IndexDocument",
    "PublicationSource",
    "PutMappingRequest",
    "RepositoryCollection",
    "SearchCluster",
    "UnitOfWork",
    "UpdateAliasesRequest",
]
