from __future__ import annotations

import json
import tarfile
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from repocatalog.adapters.archive import ArchiveDocumentWriter, archive_factory
from repocatalog.adapters.elasticsearch import default_schema
from repocatalog.domain.indexing import IndexGenerationManager, PublishLockRegistry
from repocatalog.domain.model import DocumentType
from repocatalog.domain.ports import IndexDocument
from tests.helpers.files import make_canonical_file, make_donor
from tests.support.catalog import ListPublicationSource
from tests.support.search import FakeSearchCluster

if TYPE_CHECKING:
    from pathlib import Path


def _members(path: Path) -> dict[str, object]:
    with tarfile.open(path, "r:gz") as archive:
        return {
            member.name: json.loads(archive.extractfile(member).read())  # type: ignore[union-attr]
            for member in archive.getmembers()
        }


def test_writer_stores_documents_by_index_and_type(tmp_path: Path) -> None:
    path = tmp_path / "out" / "repo.tar.gz"

    with ArchiveDocumentWriter(path, "repo-1") as writer:
        writer.write(IndexDocument(document_type=DocumentType.FILE, id="FI1", source={"id": "FI1"}))
        writer.write(
            IndexDocument(document_type=DocumentType.DONOR_TEXT, id="DO1", source={"id": "DO1"})
        )

    assert writer.written == 2
    assert _members(path) == {
        "repo-1/file/FI1.json": {"id": "FI1"},
        "repo-1/donor-text/DO1.json": {"id": "DO1"},
    }


def test_closed_writer_rejects_documents(tmp_path: Path) -> None:
    writer = ArchiveDocumentWriter(tmp_path / "repo.tar.gz", "repo-1")
    writer.close()
    writer.close()

    with pytest.raises(RuntimeError, match="closed"):
        writer.write(IndexDocument(document_type=DocumentType.FILE, id="FI1", source={}))


def test_publish_archives_the_documents_it_indexes(
    tmp_path: Path, publish_locks: PublishLockRegistry
) -> None:
    path = tmp_path / "repo.tar.gz"
    cluster = FakeSearchCluster()
    manager = IndexGenerationManager(
        cluster,
        default_schema(),
        clock=lambda: datetime(2024, 5, 1, tzinfo=UTC),
        archive_factory=archive_factory(path),
        locks=publish_locks,
    )
    source = ListPublicationSource(files=[make_canonical_file("FI1", donors=[make_donor("DO1")])])

    result = manager.publish("repo", source)

    members = _members(path)
    assert len(members) == result.total_documents
    assert "repo-20240501000000000000/file/FI1.json" in members
    assert "repo-20240501000000000000/donor-text/DO1.json" in members
