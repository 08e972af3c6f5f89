"""Application orchestration entry points."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from repocatalog.adapters.archive import archive_factory
from repocatalog.adapters.elasticsearch import ElasticsearchCluster, default_schema
from repocatalog.adapters.identity import (
    CachingIdentityService,
    HashIdentityService,
    HttpIdentityService,
)
from repocatalog.adapters.jsonl import JsonLinesGroupReader, SourceFileTranslator
from repocatalog.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from repocatalog.config import get_identity_config, get_search_config, get_storage_config
from repocatalog.domain.indexing import IndexGenerationManager
from repocatalog.domain.model import get_repositories
from repocatalog.domain.ports import CatalogUnitOfWork
from repocatalog.domain.reconciliation import CatalogStream, LoggingDiagnostics, RecordCombiner

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Iterator
    from pathlib import Path

    from repocatalog.domain.indexing import IndexGeneration, IndexSchema, PublishResult
    from repocatalog.domain.model import CanonicalFile, Repository, SourceFile
    from repocatalog.domain.ports import SearchCluster
    from repocatalog.domain.reconciliation import InvalidGroupPolicy, InvalidInputError

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class CombineReport:
    groups: int = 0
    combined: int = 0
    skipped: int = 0
    disagreements: Counter[str] = field(default_factory=Counter["str"])

    @property
    def total_disagreements(self) -> int:
        return sum(self.disagreements.values())


@contextmanager
def open_source_groups(
    path: Path | str, *, real_ids: bool = False
) -> Iterator[JsonLinesGroupReader]:
    """Yield a reader over ``path``; remote ids are issued over one shared client."""

    if not real_ids:
        yield JsonLinesGroupReader(path, SourceFileTranslator(HashIdentityService()))
        return
    with HttpIdentityService(config=get_identity_config()) as remote:
        identity = CachingIdentityService(remote)
        yield JsonLinesGroupReader(path, SourceFileTranslator(identity))
    log.info("Closed identifier service after issuing %s ids", len(identity))


def combine_catalog(
    groups: Iterable[Collection[SourceFile]],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    on_invalid: InvalidGroupPolicy = "raise",
    workers: int = 1,
) -> CombineReport:
    """Combine every group and replace the canonical store with the result."""

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyCatalogUnitOfWork

    report = CombineReport()
    diagnostics = LoggingDiagnostics()

    def on_skip(_position: int, _exc: InvalidInputError) -> None:
        report.skipped += 1

    def counted(items: Iterable[Collection[SourceFile]]) -> Iterator[Collection[SourceFile]]:
        for group in items:
            report.groups += 1
            yield group

    stream = CatalogStream(
        combiner=RecordCombiner(diagnostics=diagnostics), on_invalid=on_invalid, on_skip=on_skip
    )
    files: Iterator[CanonicalFile] = (
        stream.combine_all(counted(groups))
        if workers <= 1
        else stream.combine_all_parallel(counted(groups), max_workers=workers)
    )

    log.info("Starting combine: workers=%s, on_invalid=%s", workers, on_invalid)
    with effective_uow() as uow:
        cleared = uow.repositories.files.clear()
        report.combined = uow.repositories.files.add_all(files)
        uow.commit()

    report.disagreements.update(diagnostics.counts)
    log.info(
        "Finished combine: groups=%s, combined=%s, skipped=%s, replaced=%s, disagreements=%s",
        report.groups,
        report.combined,
        report.skipped,
        cleared,
        report.total_disagreements,
    )
    return report


@dataclass(slots=True)
class CatalogPublicationSource:
    """Publication source reading the canonical store through a unit of work."""

    unit_of_work_factory: UnitOfWorkFactory
    repositories: tuple[Repository, ...] = field(default_factory=get_repositories)

    def iter_repositories(self) -> Iterable[Repository]:
        return self.repositories

    def iter_files(self) -> Iterator[CanonicalFile]:
        with self.unit_of_work_factory() as uow:
            yield from uow.repositories.files.iter_files()


def _build_manager(
    *,
    cluster: SearchCluster | None,
    schema: IndexSchema | None,
    keep: int | None = None,
    archive: Path | str | None = None,
) -> IndexGenerationManager:
    config = get_search_config()
    return IndexGenerationManager(
        cluster or ElasticsearchCluster.from_config(config),
        schema or default_schema(),
        keep=keep if keep is not None else config.keep_generations,
        archive_factory=archive_factory(archive) if archive is not None else None,
    )


def publish_index(
    *,
    alias: str | None = None,
    keep: int | None = None,
    archive: Path | str | bool | None = None,
    cluster: SearchCluster | None = None,
    schema: IndexSchema | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> PublishResult:
    """Publish the canonical store as a new generation of ``alias``.

    ``archive=True`` writes the archive to the default location in the data dir.
    """

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyCatalogUnitOfWork
    effective_alias = alias or get_search_config().alias
    if archive is True:
        archive = get_storage_config().archive_path(effective_alias)
    elif archive is False:
        archive = None
    manager = _build_manager(cluster=cluster, schema=schema, keep=keep, archive=archive)

    log.info("Starting publish: alias=%s, keep=%s", effective_alias, manager.keep)
    result = manager.publish(effective_alias, CatalogPublicationSource(effective_uow))

    log.info(
        "Finished publish: alias=%s, index=%s, documents=%s, skipped=%s, pruned=%s",
        result.alias,
        result.index,
        result.total_documents,
        result.skipped_files,
        result.pruned,
    )
    for failure in result.prune_failures:
        log.warning("Stale generation '%s' left in place: %s", failure.index, failure.reason)
    return result


def list_generations(
    *,
    alias: str | None = None,
    cluster: SearchCluster | None = None,
    schema: IndexSchema | None = None,
) -> list[IndexGeneration]:
    manager = _build_manager(cluster=cluster, schema=schema)
    return manager.list_generations(alias or get_search_config().alias)
