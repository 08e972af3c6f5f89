"""Lazy combination of grouped source files into canonical files.

The catalog is usually read through a one-pass cursor and may not fit in
memory, so both variants below pull groups on demand. Output position ``n``
always corresponds to input group ``n``, except for groups skipped under the
``"skip"`` policy.
"""

from __future__ import annotations

import logging
from collections import deque
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from .combine import InvalidInputError, RecordCombiner

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterable, Iterator

    from repocatalog.domain.model import CanonicalFile, SourceFile

log = logging.getLogger(__name__)

type InvalidGroupPolicy = Literal["raise", "skip"]
type SkipListener = Callable[[int, InvalidInputError], None]

DEFAULT_WINDOW_PER_WORKER = 4


@dataclass(slots=True)
class CatalogStream:
    """Turn a sequence of source file groups into canonical files on demand."""

    combiner: RecordCombiner = field(default_factory=RecordCombiner)
    on_invalid: InvalidGroupPolicy = "raise"
    on_skip: SkipListener | None = None

    def combine_all(self, groups: Iterable[Collection[SourceFile]]) -> Iterator[CanonicalFile]:
        """Yield one canonical file per group, combining each only when pulled."""

        log.info("Lazily combining files...")
        for position, group in enumerate(groups):
            try:
                combined = self.combiner.combine(group)
            except InvalidInputError as exc:
                self._handle_invalid(position, exc)
                continue
            yield combined

    def combine_all_parallel(
        self,
        groups: Iterable[Collection[SourceFile]],
        *,
        max_workers: int = 4,
        executor: Executor | None = None,
        window: int | None = None,
    ) -> Iterator[CanonicalFile]:
        """Combine groups on a worker pool, yielding results in input order.

        At most ``window`` groups are in flight at once, so the input cursor is
        never drained ahead of the consumer by more than that.
        """

        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        limit = window if window is not None else max_workers * DEFAULT_WINDOW_PER_WORKER
        if limit < 1:
            raise ValueError("window must be at least 1")

        owned = executor is None
        pool = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="combine"
        )
        pending: deque[tuple[int, Future[CanonicalFile]]] = deque()
        log.info("Combining files with %s workers (window=%s)...", max_workers, limit)
        try:
            for position, group in enumerate(groups):
                pending.append((position, pool.submit(self.combiner.combine, group)))
                if len(pending) >= limit:
                    yield from self._drain_one(pending)
            while pending:
                yield from self._drain_one(pending)
        finally:
            for _, future in pending:
                future.cancel()
            if owned:
                pool.shutdown(wait=True, cancel_futures=True)

    def _drain_one(
        self, pending: deque[tuple[int, Future[CanonicalFile]]]
    ) -> Iterator[CanonicalFile]:
        position, future = pending.popleft()
        try:
            combined = future.result()
        except InvalidInputError as exc:
            self._handle_invalid(position, exc)
            return
        yield combined

    def _handle_invalid(self, position: int, exc: InvalidInputError) -> None:
        if self.on_invalid == "raise":
            raise exc
        log.warning("Skipping group %s: %s", position, exc)
        if self.on_skip is not None:
            self.on_skip(position, exc)
