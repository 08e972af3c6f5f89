"""Gzipped tar archive of every document written to a generation."""

from __future__ import annotations

import io
import json
import tarfile
import time
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from repocatalog.domain.ports import IndexDocument

log = getLogger(__name__)


class ArchiveDocumentWriter:
    """Write documents as ``<index>/<type>/<id>.json`` members of a ``.tar.gz``."""

    def __init__(self, path: Path | str, index: str) -> None:
        self.path = Path(path)
        self.index = index
        self.written = 0
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._tar: tarfile.TarFile | None = tarfile.open(self.path, "w:gz")  # noqa: SIM115

    def write(self, document: IndexDocument) -> None:
        if self._tar is None:
            raise RuntimeError(f"Archive '{self.path}' is closed")
        payload = json.dumps(document.source, sort_keys=True, default=str).encode("utf-8")
        member = tarfile.TarInfo(f"{self.index}/{document.document_type.value}/{document.id}.json")
        member.size = len(payload)
        member.mtime = int(time.time())
        self._tar.addfile(member, io.BytesIO(payload))
        self.written += 1

    def close(self) -> None:
        if self._tar is None:
            return
        self._tar.close()
        self._tar = None
        log.info("Archived %s documents of '%s' to %s", self.written, self.index, self.path)

    def __enter__(self) -> ArchiveDocumentWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def archive_factory(path: Path | str) -> Callable[[str], ArchiveDocumentWriter]:
    """Return a writer factory archiving every generation to ``path``."""

    def factory(index: str) -> ArchiveDocumentWriter:
        return ArchiveDocumentWriter(path, index)

    return factory
