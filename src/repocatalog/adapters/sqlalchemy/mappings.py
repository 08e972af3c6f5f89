"""SQLAlchemy table metadata for the canonical catalog.

Canonical files are stored whole as JSON documents; only the identifiers are
broken out into columns for lookups.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter
from sqlalchemy import JSON, Column, Dialect, Index, Integer, MetaData, String, Table, TypeDecorator

from repocatalog.domain.model import CanonicalFile

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData()

_CANONICAL_FILE_ADAPTER: TypeAdapter[CanonicalFile] = TypeAdapter(CanonicalFile)


class CanonicalFileDocument(TypeDecorator[CanonicalFile]):
    """Store a ``CanonicalFile`` as a JSON document."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: CanonicalFile | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        return _CANONICAL_FILE_ADAPTER.dump_python(value, mode="json")

    def process_result_value(self, value: Any, dialect: Dialect) -> CanonicalFile | None:
        if value is None:
            return None
        return _CANONICAL_FILE_ADAPTER.validate_python(value)


canonical_file_table = Table(
    "canonical_file",
    metadata,
    Column("row_id", Integer, primary_key=True, autoincrement=True),
    Column("file_id", String, nullable=True),
    Column("object_id", String, nullable=True),
    Column("document", CanonicalFileDocument, nullable=False),
    Index("ix_canonical_file_file_id", "file_id"),
    Index("ix_canonical_file_object_id", "object_id"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the catalog metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
