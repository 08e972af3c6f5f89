"""Index settings and mappings of a repository index generation.

Elasticsearch 8 has one mapping per index, so the properties of every
document type are put into the same mapping and documents carry their type
in ``document_type``.
"""

from __future__ import annotations

from typing import Final

from repocatalog.domain.indexing import IndexSchema
from repocatalog.domain.model import DocumentType

DOCUMENT_TYPE_FIELD: Final[str] = "document_type"

_KEYWORD: Final[dict[str, object]] = {"type": "keyword"}
_LONG: Final[dict[str, object]] = {"type": "long"}
_TEXT_SEARCH: Final[dict[str, object]] = {
    "type": "keyword",
    "fields": {
        "search": {"type": "text", "analyzer": "id_search"},
        "raw": {"type": "keyword"},
    },
}

SETTINGS: Final[dict[str, object]] = {
    "index": {"number_of_shards": 3, "number_of_replicas": 0, "max_ngram_diff": 20},
    "analysis": {
        "analyzer": {
            "id_search": {
                "type": "custom",
                "tokenizer": "whitespace",
                "filter": ["lowercase", "edge_ngram_filter"],
            }
        },
        "filter": {"edge_ngram_filter": {"type": "edge_ngram", "min_gram": 2, "max_gram": 20}},
    },
}

_COMMON: Final[dict[str, object]] = {
    DOCUMENT_TYPE_FIELD: _KEYWORD,
    "id": _KEYWORD,
}

_FILE_COPY: Final[dict[str, object]] = {
    "type": "nested",
    "properties": {
        "fileName": _KEYWORD,
        "fileFormat": _KEYWORD,
        "fileSize": _LONG,
        "fileMd5sum": _KEYWORD,
        "lastModified": _LONG,
        "repoDataBundleId": _KEYWORD,
        "repoFileId": _KEYWORD,
        "repoDataSetId": _KEYWORD,
        "repoType": _KEYWORD,
        "repoOrg": _KEYWORD,
        "repoName": _KEYWORD,
        "repoCode": _KEYWORD,
        "repoCountry": _KEYWORD,
        "repoBaseUrl": _KEYWORD,
        "repoDataPath": _KEYWORD,
        "repoMetadataPath": _KEYWORD,
        "indexFile": {
            "properties": {
                "id": _KEYWORD,
                "objectId": _KEYWORD,
                "repoFileId": _KEYWORD,
                "fileName": _KEYWORD,
                "fileFormat": _KEYWORD,
                "fileSize": _LONG,
                "fileMd5sum": _KEYWORD,
            }
        },
    },
}

_DONOR: Final[dict[str, object]] = {
    "type": "nested",
    "properties": {
        "donorId": _KEYWORD,
        "projectCode": _KEYWORD,
        "program": _KEYWORD,
        "primarySite": _KEYWORD,
        "study": _KEYWORD,
        "submittedDonorId": _KEYWORD,
        "specimenId": _KEYWORD,
        "submittedSpecimenId": _KEYWORD,
        "sampleId": _KEYWORD,
        "submittedSampleId": _KEYWORD,
        "matchedControlSampleId": _KEYWORD,
        "otherIdentifiers": {
            "properties": {
                "tcgaParticipantBarcode": _KEYWORD,
                "tcgaSampleBarcode": _KEYWORD,
                "tcgaAliquotBarcode": _KEYWORD,
            }
        },
    },
}

MAPPINGS: Final[dict[DocumentType, dict[str, object]]] = {
    DocumentType.REPOSITORY: {
        "properties": {
            **_COMMON,
            "code": _KEYWORD,
            "name": _KEYWORD,
            "type": _KEYWORD,
            "source": _KEYWORD,
            "storage": _KEYWORD,
            "environment": _KEYWORD,
            "access": _KEYWORD,
            "country": _KEYWORD,
            "timezone": _KEYWORD,
            "baseUrl": _KEYWORD,
            "dataPath": _KEYWORD,
            "metadataPath": _KEYWORD,
        }
    },
    DocumentType.FILE: {
        "properties": {
            **_COMMON,
            "objectId": _KEYWORD,
            "access": _KEYWORD,
            "studies": _KEYWORD,
            "repoCodes": _KEYWORD,
            "dataBundle": {"properties": {"dataBundleId": _KEYWORD}},
            "analysisMethod": {
                "properties": {"analysisType": _KEYWORD, "software": _KEYWORD}
            },
            "dataCategorization": {
                "properties": {"dataType": _KEYWORD, "experimentalStrategy": _KEYWORD}
            },
            "referenceGenome": {
                "properties": {
                    "genomeBuild": _KEYWORD,
                    "referenceName": _KEYWORD,
                    "downloadUrl": _KEYWORD,
                }
            },
            "fileCopies": _FILE_COPY,
            "donors": _DONOR,
        }
    },
    DocumentType.FILE_TEXT: {
        "properties": {
            **_COMMON,
            "type": _KEYWORD,
            "object_id": _TEXT_SEARCH,
            "file_name": _TEXT_SEARCH,
            "data_type": _KEYWORD,
            "data_bundle_id": _TEXT_SEARCH,
            "donor_id": _TEXT_SEARCH,
            "project_code": _KEYWORD,
            "repo_code": _KEYWORD,
        }
    },
    DocumentType.DONOR_TEXT: {
        "properties": {
            **_COMMON,
            "type": _KEYWORD,
            "donor_id": _TEXT_SEARCH,
            "submitted_donor_id": _TEXT_SEARCH,
            "specimen_id": _TEXT_SEARCH,
            "sample_id": _TEXT_SEARCH,
            "submitted_specimen_id": _TEXT_SEARCH,
            "submitted_sample_id": _TEXT_SEARCH,
            "tcga_participant_barcode": _TEXT_SEARCH,
            "tcga_sample_barcode": _TEXT_SEARCH,
            "tcga_aliquot_barcode": _TEXT_SEARCH,
        }
    },
}


def default_schema() -> IndexSchema:
    return IndexSchema(settings=SETTINGS, mappings=MAPPINGS)
