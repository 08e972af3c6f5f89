"""Read grouped source files from a JSON Lines export.

Every line holds one group: a JSON array of the source file objects that the
importers resolved to the same logical file.
"""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from .schema import SourceFilePayload

if TYPE_CHECKING:
    from collections.abc import Iterator

    from repocatalog.domain.model import SourceFile

    from .translator import SourceFileTranslator

log = getLogger(__name__)

_GROUP_ADAPTER: TypeAdapter[list[SourceFilePayload]] = TypeAdapter(list[SourceFilePayload])


class SourcePayloadError(ValueError):
    """Raised when a line of the export cannot be read as a group."""

    def __init__(self, path: Path, line_number: int, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: {reason}")


class JsonLinesGroupReader:
    """Single-pass reader yielding one list of source files per line."""

    def __init__(self, path: Path | str, translator: SourceFileTranslator) -> None:
        self.path = Path(path)
        self.translator = translator
        self.groups_read = 0

    def __iter__(self) -> Iterator[list[SourceFile]]:
        log.info("Reading source file groups from %s", self.path)
        with self.path.open(encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                yield self._parse(line, line_number)
                self.groups_read += 1

    def _parse(self, line: str, line_number: int) -> list[SourceFile]:
        try:
            payloads = _GROUP_ADAPTER.validate_json(line)
        except ValidationError as exc:
            raise SourcePayloadError(self.path, line_number, str(exc)) from exc
        return [self.translator.translate(payload) for payload in payloads]

