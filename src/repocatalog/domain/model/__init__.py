"""Domain model for the repository file catalog."""

from __future__ import annotations

from .enums import (
    Access,
    DocumentType,
    RepositoryEnvironment,
    RepositorySource,
    RepositoryStorage,
    RepositoryType,
)
from .files import (
    AnalysisMethod,
    CanonicalFile,
    DataBundle,
    DataCategorization,
    Donor,
    FileCopy,
    FileMetadata,
    IndexFile,
    OtherIdentifiers,
    ReferenceGenome,
    SourceFile,
)
from .repositories import REPOSITORIES, Repository, get_repositories, get_repository

__all__ = [
    "REPOSITORIES",
    "Access",
    "AnalysisMethod",
    "CanonicalFile",
    "DataBundle",
    "DataCategorization",
    "DocumentType",
    "Donor",
    "FileCopy",
    "FileMetadata",
    "IndexFile",
    "OtherIdentifiers",
    "ReferenceGenome",
    "Repository",
    "RepositoryEnvironment",
    "RepositorySource",
    "RepositoryStorage",
    "RepositoryType",
    "SourceFile",
    "get_repositories",
    "get_repository",
]
