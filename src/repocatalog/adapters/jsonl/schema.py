"""Source file payloads as exported by the per-repository importers."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from repocatalog.domain.model import Access, RepositorySource

log = logging.getLogger(__name__)


class SourceBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", alias_generator=to_camel, populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "Source payload %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class DataBundlePayload(SourceBaseModel):
    data_bundle_id: str | None = None


class AnalysisMethodPayload(SourceBaseModel):
    analysis_type: str | None = None
    software: str | None = None


class DataCategorizationPayload(SourceBaseModel):
    data_type: str | None = None
    experimental_strategy: str | None = None


class ReferenceGenomePayload(SourceBaseModel):
    genome_build: str | None = None
    reference_name: str | None = None
    download_url: str | None = None


class IndexFilePayload(SourceBaseModel):
    id: str | None = None
    object_id: str | None = None
    repo_file_id: str | None = None
    file_name: str | None = None
    file_format: str | None = None
    file_size: int | None = None
    file_md5sum: str | None = None


class FileCopyPayload(SourceBaseModel):
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
    index_file: IndexFilePayload | None = None


class OtherIdentifiersPayload(SourceBaseModel):
    tcga_participant_barcode: str | None = None
    tcga_sample_barcode: list[str] = Field(default_factory=list)
    tcga_aliquot_barcode: list[str] = Field(default_factory=list)


class DonorPayload(SourceBaseModel):
    donor_id: str | None = None
    project_code: str | None = None
    program: str | None = None
    primary_site: str | None = None
    study: str | None = None
    submitted_donor_id: str | None = None
    specimen_id: list[str] = Field(default_factory=list)
    submitted_specimen_id: list[str] = Field(default_factory=list)
    sample_id: list[str] = Field(default_factory=list)
    submitted_sample_id: list[str] = Field(default_factory=list)
    matched_control_sample_id: str | None = None
    other_identifiers: OtherIdentifiersPayload | None = None


class SourceFilePayload(SourceBaseModel):
    source: RepositorySource
    id: str | None = None
    object_id: str | None = None
    access: Access | None = None
    studies: list[str] = Field(default_factory=list)
    data_bundle: DataBundlePayload | None = None
    analysis_method: AnalysisMethodPayload | None = None
    data_categorization: DataCategorizationPayload | None = None
    reference_genome: ReferenceGenomePayload | None = None
    file_copies: list[FileCopyPayload] = Field(default_factory=list)
    donors: list[DonorPayload] = Field(default_factory=list)
