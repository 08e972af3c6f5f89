"""Generation names derived from an alias and a creation timestamp.

Names look like ``<alias>-<YYYYMMDDHHMMSSffffff>`` (UTC). The suffix is fixed
width and zero padded, so for one alias lexical order is chronological order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

log = logging.getLogger(__name__)

STAMP_FORMAT: Final[str] = "%Y%m%d%H%M%S%f"
STAMP_LENGTH: Final[int] = 20


@dataclass(frozen=True, slots=True)
class IndexNamingScheme:
    separator: str = "-"

    def new_name(self, alias: str, now: datetime | None = None) -> str:
        moment = _as_utc(now or datetime.now(UTC))
        return f"{alias}{self.separator}{moment.strftime(STAMP_FORMAT)}"

    def belongs_to(self, name: str, alias: str) -> bool:
        prefix = f"{alias}{self.separator}"
        if not name.startswith(prefix):
            return False
        stamp = name[len(prefix) :]
        return len(stamp) == STAMP_LENGTH and stamp.isascii() and stamp.isdigit()

    def extract_timestamp(self, name: str) -> datetime:
        _, separator, stamp = name.rpartition(self.separator)
        if not separator or len(stamp) != STAMP_LENGTH or not stamp.isdigit():
            raise ValueError(f"Not a generation name: {name!r}")
        return datetime.strptime(stamp, STAMP_FORMAT).replace(tzinfo=UTC)

    def generations(self, names: Iterable[str], alias: str) -> list[str]:
        """Return the names belonging to ``alias``, newest first."""

        return sorted((name for name in names if self.belongs_to(name, alias)), reverse=True)

    def next_name(
        self,
        alias: str,
        existing: Iterable[str],
        now: datetime | None = None,
    ) -> str:
        """Return a new name that sorts after every existing generation of ``alias``."""

        candidate = self.new_name(alias, now)
        owned = self.generations(existing, alias)
        if owned and owned[0] > candidate:
            latest = self.extract_timestamp(owned[0])
            bumped = self.new_name(alias, latest + timedelta(microseconds=1))
            log.warning(
                "Clock is behind newest generation '%s'; using '%s' instead of '%s'",
                owned[0],
                bumped,
                candidate,
            )
            return bumped
        return candidate


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)
