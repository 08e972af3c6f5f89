"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from itertools import batched
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select

from repocatalog.adapters.sqlalchemy.mappings import canonical_file_table

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from sqlalchemy.orm import Session

    from repocatalog.domain.model import CanonicalFile

DEFAULT_BATCH_SIZE = 500


def _row(file: CanonicalFile) -> dict[str, Any]:
    return {"file_id": file.id, "object_id": file.object_id, "document": file}


class SqlAlchemyCanonicalFileRepository:
    def __init__(self, session: Session, *, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self.session = session
        self.batch_size = batch_size

    def add(self, file: CanonicalFile) -> None:
        self.session.execute(insert(canonical_file_table), [_row(file)])

    def add_all(self, files: Iterable[CanonicalFile]) -> int:
        added = 0
        for batch in batched(files, self.batch_size):
            self.session.execute(insert(canonical_file_table), [_row(file) for file in batch])
            added += len(batch)
        return added

    def clear(self) -> int:
        result = self.session.execute(delete(canonical_file_table))
        return result.rowcount or 0  # pyright: ignore[reportAttributeAccessIssue]

    def count(self) -> int:
        stmt = select(func.count()).select_from(canonical_file_table)
        return self.session.execute(stmt).scalar_one()

    def get_by_file_id(self, file_id: str) -> CanonicalFile | None:
        stmt = (
            select(canonical_file_table.c.document)
            .where(canonical_file_table.c.file_id == file_id)
            .order_by(canonical_file_table.c.row_id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def iter_files(self) -> Iterator[CanonicalFile]:
        stmt = (
            select(canonical_file_table.c.document)
            .order_by(canonical_file_table.c.row_id)
            .execution_options(yield_per=self.batch_size)
        )
        yield from self.session.execute(stmt).scalars()
