"""Repository file metadata as reported by sources and as combined into the catalog.

``SourceFile`` is one repository's description of a logical file. A group of
source files describing the same object is merged into one ``CanonicalFile``.
Both share the attribute shape of ``FileMetadata``; only the source file knows
which repository reported it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from repocatalog.domain.model.enums import Access, RepositorySource


@dataclass(slots=True, kw_only=True)
class DataBundle:
    data_bundle_id: str | None = None


@dataclass(slots=True, kw_only=True)
class AnalysisMethod:
    analysis_type: str | None = None
    software: str | None = None


@dataclass(slots=True, kw_only=True)
class DataCategorization:
    data_type: str | None = None
    experimental_strategy: str | None = None


@dataclass(slots=True, kw_only=True)
class ReferenceGenome:
    genome_build: str | None = None
    reference_name: str | None = None
    download_url: str | None = None


@dataclass(slots=True, kw_only=True)
class IndexFile:
    """Secondary index (``.bai``, ``.tbi``) accompanying a file copy."""

    id: str | None = None
    object_id: str | None = None
    repo_file_id: str | None = None
    file_name: str | None = None
    file_format: str | None = None
    file_size: int | None = None
    file_md5sum: str | None = None


@dataclass(slots=True, kw_only=True)
class FileCopy:
    """One physical copy of a file hosted by a repository."""

    file_name: str | None = None
    file_format: str | None = None
    file_size: int | None = None
    file_md5sum: str | None = None
    last_modified: int | None = None

    repo_data_bundle_id: str | None = None
    repo_file_id: str | None = None
    repo_data_set_id: str | None = None

    repo_type: str | None = None
    repo_org: str | None = None
    repo_name: str | None = None
    repo_code: str | None = None
    repo_country: str | None = None
    repo_base_url: str | None = None
    repo_data_path: str | None = None
    repo_metadata_path: str | None = None

    index_file: IndexFile | None = None


@dataclass(slots=True, kw_only=True)
class OtherIdentifiers:
    tcga_participant_barcode: str | None = None
    tcga_sample_barcode: list[str] = field(default_factory=list["str"])
    tcga_aliquot_barcode: list[str] = field(default_factory=list["str"])


@dataclass(slots=True, kw_only=True)
class Donor:
    donor_id: str | None = None
    project_code: str | None = None
    program: str | None = None
    primary_site: str | None = None
    study: str | None = None

    submitted_donor_id: str | None = None
    specimen_id: list[str] = field(default_factory=list["str"])
    submitted_specimen_id: list[str] = field(default_factory=list["str"])
    sample_id: list[str] = field(default_factory=list["str"])
    submitted_sample_id: list[str] = field(default_factory=list["str"])
    matched_control_sample_id: str | None = None

    other_identifiers: OtherIdentifiers | None = None

    @property
    def business_key(self) -> str | None:
        """``<project_code>:<submitted_donor_id>`` as understood by the id service."""

        if self.project_code is None or self.submitted_donor_id is None:
            return None
        return f"{self.project_code}:{self.submitted_donor_id}"

    @property
    def identity(self) -> tuple[str, ...] | None:
        """Key used to collapse donors reported by several sources.

        The issued donor id wins; donors without one fall back to their
        business key. Donors with neither are never collapsed.
        """

        if self.donor_id is not None:
            return ("donor_id", self.donor_id)
        business_key = self.business_key
        if business_key is not None:
            return ("business_key", business_key)
        return None


@dataclass(slots=True, kw_only=True)
class FileMetadata:
    id: str | None = None
    object_id: str | None = None
    access: Access | None = None
    studies: list[str] = field(default_factory=list["str"])

    data_bundle: DataBundle | None = None
    analysis_method: AnalysisMethod | None = None
    data_categorization: DataCategorization | None = None
    reference_genome: ReferenceGenome | None = None

    file_copies: list[FileCopy] = field(default_factory=list["FileCopy"])
    donors: list[Donor] = field(default_factory=list["Donor"])


@dataclass(slots=True, kw_only=True)
class SourceFile(FileMetadata):
    """A file as described by exactly one repository source."""

    source: RepositorySource


@dataclass(slots=True, kw_only=True)
class CanonicalFile(FileMetadata):
    """A file merged from every source that reported it."""

    @property
    def repo_codes(self) -> tuple[str, ...]:
        codes: list[str] = []
        for copy in self.file_copies:
            if copy.repo_code is not None and copy.repo_code not in codes:
                codes.append(copy.repo_code)
        return tuple(codes)
