"""Publish the catalog into a new index generation and move the alias onto it.

A publish runs the phases ``BUILDING -> VERIFYING -> PUBLISHED -> PRUNING``
and returns to ``IDLE``. The alias only ever points at a fully built and
verified generation:

- every failure before the swap leaves the alias where it was; the partial
  generation is left behind and pruned by a later run
- the swap is one ``update_aliases`` call removing the alias from every
  current holder and adding it to the new generation
- pruning failures are reported in ``PublishResult`` and never raised
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Final

from repocatalog.domain.model import DocumentType
from repocatalog.domain.ports import (
    AliasAction,
    AliasActionKind,
    CreateIndexRequest,
    DeleteIndexRequest,
    PutMappingRequest,
    UpdateAliasesRequest,
)

from .documents import DocumentProjector
from .errors import (
    ClusterError,
    ClusterNotAcknowledgedError,
    ConcurrentPublishError,
    IndexVerificationError,
)
from .generation import GenerationState, IndexGeneration, PublishPhase, next_phase
from .naming import IndexNamingScheme

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from repocatalog.domain.ports import (
        Acknowledgement,
        DocumentWriter,
        PublicationSource,
        SearchCluster,
    )

    from .schema import IndexSchema

log = logging.getLogger(__name__)

DEFAULT_KEEP_GENERATIONS: Final[int] = 3

type Clock = Callable[[], datetime]
type WriterFactory = Callable[[str], DocumentWriter]


@dataclass(frozen=True, slots=True)
class StalePruneFailure:
    index: str
    reason: str


@dataclass(slots=True, kw_only=True)
class PublishResult:
    alias: str
    index: str
    previous: tuple[str, ...] = ()
    counts: Counter[DocumentType] = field(default_factory=Counter["DocumentType"])
    skipped_files: int = 0
    pruned: list[str] = field(default_factory=list["str"])
    prune_failures: list[StalePruneFailure] = field(default_factory=list["StalePruneFailure"])

    @property
    def total_documents(self) -> int:
        return sum(self.counts.values())


class PublishLockRegistry:
    """Aliases with a publish in progress; a second publish is rejected, not queued.

    Only aliases currently being published are tracked.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._held: set[str] = set()

    @contextmanager
    def hold(self, alias: str) -> Iterator[None]:
        with self._guard:
            if alias in self._held:
                raise ConcurrentPublishError(alias)
            self._held.add(alias)
        try:
            yield
        finally:
            with self._guard:
                self._held.discard(alias)

    def is_held(self, alias: str) -> bool:
        with self._guard:
            return alias in self._held


PUBLISH_LOCKS: Final[PublishLockRegistry] = PublishLockRegistry()


class IndexGenerationManager:
    """Build, verify, publish and prune index generations of an alias."""

    def __init__(
        self,
        cluster: SearchCluster,
        schema: IndexSchema,
        *,
        naming: IndexNamingScheme | None = None,
        keep: int = DEFAULT_KEEP_GENERATIONS,
        clock: Clock | None = None,
        archive_factory: WriterFactory | None = None,
        locks: PublishLockRegistry | None = None,
    ) -> None:
        if keep < 1:
            raise ValueError("keep must be at least 1")
        self.cluster = cluster
        self.schema = schema
        self.naming = naming or IndexNamingScheme()
        self.keep = keep
        self.clock: Clock = clock or (lambda: datetime.now(UTC))
        self.archive_factory = archive_factory
        self.locks = locks or PUBLISH_LOCKS
        self._phases: dict[str, PublishPhase] = {}

    def phase(self, alias: str) -> PublishPhase:
        return self._phases.get(alias, PublishPhase.IDLE)

    def publish(self, alias: str, source: PublicationSource) -> PublishResult:
        with self.locks.hold(alias):
            try:
                return self._publish(alias, source)
            except BaseException:
                if self.phase(alias) in (PublishPhase.BUILDING, PublishPhase.VERIFYING):
                    log.error("Publish of alias '%s' aborted; alias left unchanged", alias)
                raise
            finally:
                self._phases[alias] = PublishPhase.IDLE

    def _publish(self, alias: str, source: PublicationSource) -> PublishResult:
        self._enter(alias, PublishPhase.BUILDING)
        indices = self.cluster.list_indices()
        previous = tuple(sorted(name for name, aliases in indices.items() if alias in aliases))
        name = self.claim_name(alias, indices)
        self.build(name)
        result = PublishResult(alias=alias, index=name, previous=previous)
        self.load(name, source, result)

        self._enter(alias, PublishPhase.VERIFYING)
        self.verify(name, expected=result.total_documents)

        self.swap(alias, name, previous)
        self._enter(alias, PublishPhase.PUBLISHED)
        log.info(
            "Alias '%s' now points at '%s' (%s documents, previously %s)",
            alias,
            name,
            result.total_documents,
            list(previous) or "unset",
        )

        self._enter(alias, PublishPhase.PRUNING)
        pruned, failures = self.prune(alias)
        result.pruned.extend(pruned)
        result.prune_failures.extend(failures)
        return result

    def claim_name(self, alias: str, indices: Mapping[str, frozenset[str]]) -> str:
        """Pick the name of the next generation, clearing a stale clock collision.

        A colliding index that currently holds the alias is never deleted; the
        stamp is bumped past it instead.
        """

        name = self.naming.next_name(alias, indices, self.clock())
        if name not in indices:
            return name
        if alias in indices[name]:
            bumped = self.naming.extract_timestamp(name) + timedelta(microseconds=1)
            return self.naming.new_name(alias, bumped)
        log.warning("Index '%s' already exists; deleting it before rebuilding", name)
        self._require(self.cluster.delete_index(DeleteIndexRequest(indices=(name,))))
        return name

    def build(self, name: str) -> None:
        """Create ``name`` with the schema settings and the mapping of every document type."""

        log.info("Creating index '%s'...", name)
        self._require(
            self.cluster.create_index(CreateIndexRequest(index=name, settings=self.schema.settings))
        )
        for document_type in self.schema.document_types:
            self._require(
                self.cluster.put_mapping(
                    PutMappingRequest(
                        index=name,
                        document_type=document_type,
                        mapping=self.schema.mapping_for(document_type),
                    )
                )
            )

    def load(self, name: str, source: PublicationSource, result: PublishResult) -> None:
        """Stream every projected document into ``name`` and count them per kind."""

        projector = DocumentProjector()
        log.info("Loading documents into '%s'...", name)
        with ExitStack() as stack:
            writers = [stack.enter_context(self.cluster.open_writer(name))]
            if self.archive_factory is not None:
                writers.append(stack.enter_context(self.archive_factory(name)))
            for document in projector.project(source):
                for writer in writers:
                    writer.write(document)
                result.counts[document.document_type] += 1
        result.skipped_files = projector.skipped
        log.info(
            "Loaded %s documents into '%s': %s",
            result.total_documents,
            name,
            {str(kind): count for kind, count in sorted(result.counts.items())},
        )

    def verify(self, name: str, *, expected: int) -> None:
        self.cluster.refresh(name)
        actual = self.cluster.count(name)
        if actual != expected:
            raise IndexVerificationError(name, expected=expected, actual=actual)
        log.info("Verified '%s' holds %s documents", name, actual)

    def swap(self, alias: str, name: str, holders: tuple[str, ...]) -> None:
        """Move ``alias`` from ``holders`` to ``name`` in one atomic request."""

        actions = [
            AliasAction(kind=AliasActionKind.REMOVE, index=holder, alias=alias)
            for holder in holders
            if holder != name
        ]
        actions.append(AliasAction(kind=AliasActionKind.ADD, index=name, alias=alias))
        self._require(self.cluster.update_aliases(UpdateAliasesRequest(actions=tuple(actions))))

    def prune(self, alias: str) -> tuple[list[str], list[StalePruneFailure]]:
        """Delete every generation of ``alias`` older than the newest ``keep``.

        A generation holding the alias is never deleted, so it survives in
        addition to the newest ``keep``.
        """

        indices = self.cluster.list_indices()
        stale = [
            name
            for name in self.naming.generations(indices, alias)[self.keep :]
            if alias not in indices[name]
        ]
        if not stale:
            log.debug("No stale generations of '%s' to prune", alias)
            return [], []

        pruned: list[str] = []
        failures: list[StalePruneFailure] = []
        for name in stale:
            try:
                self._require(self.cluster.delete_index(DeleteIndexRequest(indices=(name,))))
            except ClusterError as exc:
                log.warning("Could not prune stale generation '%s': %s", name, exc)
                failures.append(StalePruneFailure(index=name, reason=str(exc)))
                continue
            log.info("Pruned stale generation '%s'", name)
            pruned.append(name)
        return pruned, failures

    def list_generations(self, alias: str) -> list[IndexGeneration]:
        """Return the generations of ``alias``, newest first."""

        indices = self.cluster.list_indices()
        names = self.naming.generations(indices, alias)
        published = next((name for name in names if alias in indices[name]), None)
        generations: list[IndexGeneration] = []
        for name in names:
            if name == published:
                state = GenerationState.PUBLISHED
            elif published is not None and name < published:
                state = GenerationState.RETIRED
            else:
                state = GenerationState.BUILDING
            generations.append(
                IndexGeneration(
                    name=name,
                    alias=alias,
                    created_at=self.naming.extract_timestamp(name),
                    state=state,
                )
            )
        return generations

    def _enter(self, alias: str, phase: PublishPhase) -> None:
        current = self.phase(alias)
        if next_phase(current) is not phase:
            raise RuntimeError(f"Alias '{alias}' cannot move from {current} to {phase}")
        log.debug("Alias '%s': %s -> %s", alias, current, phase)
        self._phases[alias] = phase

    @staticmethod
    def _require(acknowledgement: Acknowledgement) -> None:
        if not acknowledgement.acknowledged:
            raise ClusterNotAcknowledgedError(acknowledgement.operation, acknowledgement.target)
