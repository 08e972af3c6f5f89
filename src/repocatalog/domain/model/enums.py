"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RepositorySource(StrEnum):
    """Repository systems that report file metadata.

    Declaration order is significant: it is the base priority used when
    combining files reported by several sources.
    """

    PCAWG = "pcawg"
    AWS = "aws"
    COLLAB = "collab"
    EGA = "ega"
    GDC = "gdc"
    PDC = "pdc"
    TCGA = "tcga"


class Access(StrEnum):
    OPEN = "open"
    CONTROLLED = "controlled"


class RepositoryType(StrEnum):
    S3 = "s3"
    GNOS = "gnos"
    EGA = "ega"
    GDC = "gdc"
    PDC = "pdc"

    @property
    def data_path(self) -> str:
        return _DATA_PATHS[self]

    @property
    def metadata_path(self) -> str:
        return _METADATA_PATHS[self]


_DATA_PATHS: dict[RepositoryType, str] = {
    RepositoryType.S3: "/oicr.icgc/data",
    RepositoryType.GNOS: "/cghub/data/analysis/download",
    RepositoryType.EGA: "/files",
    RepositoryType.GDC: "/data",
    RepositoryType.PDC: "/data",
}

_METADATA_PATHS: dict[RepositoryType, str] = {
    RepositoryType.S3: "/oicr.icgc.meta/metadata",
    RepositoryType.GNOS: "/cghub/metadata/analysisFull",
    RepositoryType.EGA: "/files",
    RepositoryType.GDC: "/files",
    RepositoryType.PDC: "/files",
}


class RepositoryStorage(StrEnum):
    OBJECT = "object"
    FILE = "file"


class RepositoryEnvironment(StrEnum):
    CLOUD = "cloud"
    HPC = "hpc"


class DocumentType(StrEnum):
    """Kinds of documents stored in a repository index generation."""

    REPOSITORY = "repository"
    FILE = "file"
    FILE_TEXT = "file-text"
    DONOR_TEXT = "donor-text"
