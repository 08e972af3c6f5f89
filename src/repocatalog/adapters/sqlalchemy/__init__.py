"""SQLAlchemy adapter package for the canonical catalog."""

from __future__ import annotations

from .mappings import canonical_file_table, create_all_tables, metadata
from .repositories import SqlAlchemyCanonicalFileRepository
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCanonicalFileRepository",
    "SqlAlchemyCatalogUnitOfWork",
    "StartupError",
    "canonical_file_table",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
