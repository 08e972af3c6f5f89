"""Translate source file payloads into domain source files."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from repocatalog.domain.model import (
    AnalysisMethod,
    DataBundle,
    DataCategorization,
    Donor,
    FileCopy,
    IndexFile,
    OtherIdentifiers,
    ReferenceGenome,
    SourceFile,
)
from repocatalog.domain.ports import IdentityKind

from .schema import SourceFilePayload

if TYPE_CHECKING:
    from repocatalog.domain.ports import IdentityService

    from .schema import DonorPayload, FileCopyPayload

log = getLogger(__name__)


class SourceFileTranslator:
    """Build ``SourceFile`` values, filling missing ids from the identity service.

    A file without an id gets one issued for its object id; a donor without an
    id gets one issued for its ``<project_code>:<submitted_donor_id>`` key.
    """

    def __init__(self, identity: IdentityService) -> None:
        self.identity = identity

    def translate(self, payload: SourceFilePayload | dict[str, object]) -> SourceFile:
        model = (
            payload
            if isinstance(payload, SourceFilePayload)
            else SourceFilePayload.model_validate(payload)
        )
        file_id = model.id
        if file_id is None and model.object_id is not None:
            file_id = self.identity.ensure_id(IdentityKind.FILE, model.object_id)

        return SourceFile(
            source=model.source,
            id=file_id,
            object_id=model.object_id,
            access=model.access,
            studies=list(model.studies),
            data_bundle=(
                DataBundle(**model.data_bundle.model_dump(include={"data_bundle_id"}))
                if model.data_bundle
                else None
            ),
            analysis_method=(
                AnalysisMethod(
                    analysis_type=model.analysis_method.analysis_type,
                    software=model.analysis_method.software,
                )
                if model.analysis_method
                else None
            ),
            data_categorization=(
                DataCategorization(
                    data_type=model.data_categorization.data_type,
                    experimental_strategy=model.data_categorization.experimental_strategy,
                )
                if model.data_categorization
                else None
            ),
            reference_genome=(
                ReferenceGenome(
                    genome_build=model.reference_genome.genome_build,
                    reference_name=model.reference_genome.reference_name,
                    download_url=model.reference_genome.download_url,
                )
                if model.reference_genome
                else None
            ),
            file_copies=[_file_copy(copy) for copy in model.file_copies],
            donors=[self._donor(donor) for donor in model.donors],
        )

    def _donor(self, payload: DonorPayload) -> Donor:
        donor = Donor(
            donor_id=payload.donor_id,
            project_code=payload.project_code,
            program=payload.program,
            primary_site=payload.primary_site,
            study=payload.study,
            submitted_donor_id=payload.submitted_donor_id,
            specimen_id=list(payload.specimen_id),
            submitted_specimen_id=list(payload.submitted_specimen_id),
            sample_id=list(payload.sample_id),
            submitted_sample_id=list(payload.submitted_sample_id),
            matched_control_sample_id=payload.matched_control_sample_id,
            other_identifiers=(
                OtherIdentifiers(
                    tcga_participant_barcode=payload.other_identifiers.tcga_participant_barcode,
                    tcga_sample_barcode=list(payload.other_identifiers.tcga_sample_barcode),
                    tcga_aliquot_barcode=list(payload.other_identifiers.tcga_aliquot_barcode),
                )
                if payload.other_identifiers
                else None
            ),
        )
        business_key = donor.business_key
        if donor.donor_id is None and business_key is not None:
            donor.donor_id = self.identity.ensure_id(IdentityKind.DONOR, business_key)
        return donor


def _file_copy(payload: FileCopyPayload) -> FileCopy:
    fields = payload.model_dump(exclude={"index_file"}, include=set(type(payload).model_fields))
    index_file = (
        IndexFile(**payload.index_file.model_dump(include=set(type(payload.index_file).model_fields)))
        if payload.index_file
        else None
    )
    return FileCopy(**fields, index_file=index_file)
