"""Projections of the catalog into the documents of an index generation.

Four kinds of documents are written per generation:

- ``repository``: one descriptor per hosting repository
- ``file``: the file-centric document, the canonical file with camelCase keys
- ``file-text``: a flat document of searchable file identifiers
- ``donor-text``: one document per donor id, aggregating the identifiers of
  that donor across every file it appears in

Donor-text documents can only be emitted once every file has been seen, so
``DocumentProjector`` accumulates the donor summary while it streams files and
emits the donor documents last.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from repocatalog.domain.model import DocumentType
from repocatalog.domain.ports import IndexDocument

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from _typeshed import DataclassInstance

    from repocatalog.domain.model import CanonicalFile, Donor, Repository
    from repocatalog.domain.ports import PublicationSource

log = logging.getLogger(__name__)

DONOR_TEXT_FIELDS: Final[tuple[str, ...]] = (
    "submitted_donor_id",
    "specimen_id",
    "sample_id",
    "submitted_specimen_id",
    "submitted_sample_id",
    "tcga_participant_barcode",
    "tcga_sample_barcode",
    "tcga_aliquot_barcode",
)


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def dataclass_document(value: DataclassInstance) -> dict[str, object]:
    rendered: dict[str, object] = {}
    for attribute in fields(value):
        item = getattr(value, attribute.name)
        if item is None:
            continue
        rendered[camel_case(attribute.name)] = to_document(item)
    return rendered


def to_document(value: object) -> object:
    """Render dataclasses, enums and lists as JSON ready values with camelCase keys.

    ``None`` attributes are left out of the rendered mapping.
    """

    if is_dataclass(value) and not isinstance(value, type):
        return dataclass_document(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [to_document(item) for item in value]  # pyright: ignore[reportUnknownVariableType]
        return sorted(items) if isinstance(value, (set, frozenset)) else items  # pyright: ignore[reportUnknownArgumentType]
    return value


def repository_document(repository: Repository) -> IndexDocument:
    return IndexDocument(
        document_type=DocumentType.REPOSITORY,
        id=repository.code,
        source={
            "id": repository.code,
            "code": repository.code,
            "name": repository.name,
            "type": repository.type.value,
            "source": repository.source.value,
            "storage": repository.storage.value,
            "environment": repository.environment.value,
            "access": sorted(access.value for access in repository.access),
            "country": repository.country,
            "timezone": repository.timezone,
            "baseUrl": repository.base_url,
            "dataPath": repository.data_path,
            "metadataPath": repository.metadata_path,
        },
    )


def file_document(file: CanonicalFile, file_id: str) -> IndexDocument:
    source = dataclass_document(file)
    source["id"] = file_id
    source["repoCodes"] = list(file.repo_codes)
    return IndexDocument(document_type=DocumentType.FILE, id=file_id, source=source)


def file_text_document(file: CanonicalFile, file_id: str) -> IndexDocument:
    data_type = file.data_categorization.data_type if file.data_categorization else None
    bundle_id = file.data_bundle.data_bundle_id if file.data_bundle else None
    return IndexDocument(
        document_type=DocumentType.FILE_TEXT,
        id=file_id,
        source={
            "id": file_id,
            "type": "file",
            "object_id": file.object_id,
            "file_name": _present(copy.file_name for copy in file.file_copies),
            "data_type": data_type,
            "data_bundle_id": bundle_id,
            "donor_id": _present(donor.donor_id for donor in file.donors),
            "project_code": _present(donor.project_code for donor in file.donors),
            "repo_code": list(file.repo_codes),
        },
    )


@dataclass(slots=True)
class DonorTextSummary:
    """Identifiers of each donor, gathered across every file it appears in."""

    _donors: dict[str, dict[str, set[str]]] = field(default_factory=dict, repr=False)

    def add_file(self, file: CanonicalFile) -> None:
        for donor in file.donors:
            if donor.donor_id is None:
                continue
            entry = self._donors.get(donor.donor_id)
            if entry is None:
                entry = self._donors[donor.donor_id] = defaultdict(set)
            for name, values in _donor_identifiers(donor):
                entry[name].update(values)

    def __len__(self) -> int:
        return len(self._donors)

    def documents(self) -> Iterator[IndexDocument]:
        for donor_id in sorted(self._donors):
            entry = self._donors[donor_id]
            source: dict[str, object] = {"id": donor_id, "type": "donor", "donor_id": donor_id}
            for name in DONOR_TEXT_FIELDS:
                source[name] = sorted(entry.get(name, ()))
            yield IndexDocument(document_type=DocumentType.DONOR_TEXT, id=donor_id, source=source)


@dataclass(slots=True)
class DocumentProjector:
    """Stream every document of a generation from a publication source.

    Files without any identifier cannot be addressed in the index; they are
    skipped with a warning and counted in ``skipped``.
    """

    skipped: int = 0

    def project(self, source: PublicationSource) -> Iterator[IndexDocument]:
        self.skipped = 0
        for repository in source.iter_repositories():
            yield repository_document(repository)

        donors = DonorTextSummary()
        for file in source.iter_files():
            file_id = file.id or file.object_id
            if file_id is None:
                self.skipped += 1
                log.warning("Skipping file without id or object id: %s", file.file_copies)
                continue
            yield file_document(file, file_id)
            yield file_text_document(file, file_id)
            donors.add_file(file)

        log.info("Projecting %s donor-text documents...", len(donors))
        yield from donors.documents()


def _present(values: Iterable[str | None]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value is not None and value not in seen:
            seen.append(value)
    return seen


def _donor_identifiers(donor: Donor) -> Iterator[tuple[str, Iterable[str]]]:
    if donor.submitted_donor_id is not None:
        yield "submitted_donor_id", (donor.submitted_donor_id,)
    yield "specimen_id", donor.specimen_id
    yield "sample_id", donor.sample_id
    yield "submitted_specimen_id", donor.submitted_specimen_id
    yield "submitted_sample_id", donor.submitted_sample_id
    other = donor.other_identifiers
    if other is None:
        return
    if other.tcga_participant_barcode is not None:
        yield "tcga_participant_barcode", (other.tcga_participant_barcode,)
    yield "tcga_sample_barcode", other.tcga_sample_barcode
    yield "tcga_aliquot_barcode", other.tcga_aliquot_barcode
