"""Local files of the catalog: canonical store, identifier cache and archives.

Everything lives under one data directory, ``REPOCATALOG_DATA_DIR`` or
``$XDG_DATA_HOME/repocatalog``. ``DATABASE_URI`` replaces the local store
with any SQLAlchemy URI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "repocatalog"
CATALOG_DB_FILENAME: Final[str] = "catalog.db"
IDENTITY_CACHE_FILENAME: Final[str] = "identity_cache.db"
ARCHIVE_DIR_NAME: Final[str] = "archives"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path

    def _under(self, *parts: str, ensure: bool) -> Path:
        path = self.data_dir.expanduser().resolve().joinpath(*parts)
        if ensure:
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def catalog_path(self, *, ensure: bool = True) -> Path:
        return self._under(CATALOG_DB_FILENAME, ensure=ensure)

    def identity_cache_path(self, *, ensure: bool = True) -> Path:
        return self._under(IDENTITY_CACHE_FILENAME, ensure=ensure)

    def archive_path(self, alias: str, *, ensure: bool = True) -> Path:
        """Default archive for ``alias``; each publish overwrites it."""
        return self._under(ARCHIVE_DIR_NAME, f"{alias}.tar.gz", ensure=ensure)


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("REPOCATALOG_DATA_DIR")
    if env_dir:
        return StorageConfig(data_dir=Path(env_dir))
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return StorageConfig(data_dir=base / APP_DIR_NAME)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    catalog_path = (storage or get_storage_config()).catalog_path()
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{catalog_path}")
