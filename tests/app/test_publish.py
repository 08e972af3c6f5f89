from __future__ import annotations

import tarfile
from typing import TYPE_CHECKING

import pytest

from repocatalog.app import combine_catalog, list_generations, publish_index
from repocatalog.domain.indexing import ClusterNotAcknowledgedError, GenerationState
from repocatalog.domain.model import DocumentType, RepositorySource
from tests.helpers.files import make_donor, make_source_file
from tests.support.search import FakeSearchCluster

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from repocatalog.adapters.sqlalchemy import SqlAlchemyCatalogUnitOfWork

type UnitOfWorkFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


@pytest.fixture
def combined(sqlite_unit_of_work: UnitOfWorkFactory) -> UnitOfWorkFactory:
    combine_catalog(
        [
            [
                make_source_file(RepositorySource.EGA, file_id="FI1", donors=[make_donor("DO1")]),
                make_source_file(RepositorySource.GDC, file_id="FI1", donors=[make_donor("DO1")]),
            ],
            [make_source_file(file_id="FI2", object_id="obj-2", donors=[make_donor("DO2")])],
        ],
        unit_of_work_factory=sqlite_unit_of_work,
    )
    return sqlite_unit_of_work


def test_publish_indexes_the_combined_catalog(combined: UnitOfWorkFactory) -> None:
    cluster = FakeSearchCluster()

    result = publish_index(alias="repo", keep=3, cluster=cluster, unit_of_work_factory=combined)

    assert result.index.startswith("repo-")
    assert cluster.alias_targets("repo") == [result.index]
    assert result.counts[DocumentType.FILE] == 2
    assert result.counts[DocumentType.FILE_TEXT] == 2
    assert result.counts[DocumentType.DONOR_TEXT] == 2
    assert result.skipped_files == 0


def test_republishing_keeps_three_generations(combined: UnitOfWorkFactory) -> None:
    cluster = FakeSearchCluster()
    for day in range(1, 5):
        cluster.add_index(f"repo-2024010{day}000000000000")
    cluster.indices["repo-20240104000000000000"].add("repo")

    result = publish_index(alias="repo", keep=3, cluster=cluster, unit_of_work_factory=combined)

    assert sorted(result.pruned) == ["repo-20240101000000000000", "repo-20240102000000000000"]
    generations = list_generations(alias="repo", cluster=cluster)
    assert [generation.state for generation in generations] == [
        GenerationState.PUBLISHED,
        GenerationState.RETIRED,
        GenerationState.RETIRED,
    ]


def test_failed_publish_propagates_and_keeps_alias(combined: UnitOfWorkFactory) -> None:
    cluster = FakeSearchCluster()
    cluster.add_index("repo-20240101000000000000", "repo")
    cluster.fail_writes_after = 0

    with pytest.raises(ClusterNotAcknowledgedError):
        publish_index(alias="repo", cluster=cluster, unit_of_work_factory=combined)

    assert cluster.alias_targets("repo") == ["repo-20240101000000000000"]


def test_alias_defaults_to_configuration(
    combined: UnitOfWorkFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("REPOCATALOG_INDEX_ALIAS", "configured")
    cluster = FakeSearchCluster()

    result = publish_index(cluster=cluster, unit_of_work_factory=combined)

    assert result.alias == "configured"
    assert cluster.alias_targets("configured") == [result.index]


def test_archive_true_writes_to_the_data_dir(
    combined: UnitOfWorkFactory, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("REPOCATALOG_DATA_DIR", str(tmp_path))
    cluster = FakeSearchCluster()

    result = publish_index(
        alias="repo", archive=True, cluster=cluster, unit_of_work_factory=combined
    )

    archive = tmp_path.resolve() / "archives" / "repo.tar.gz"
    with tarfile.open(archive, "r:gz") as members:
        assert len(members.getmembers()) == result.total_documents
