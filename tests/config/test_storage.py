from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest  # noqa: TC002

from repocatalog.config import storage


def test_storage_config_prefers_explicit_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("REPOCATALOG_DATA_DIR", str(custom))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))

    result = storage.get_storage_config().catalog_path(ensure=False)

    assert result == custom.resolve() / storage.CATALOG_DB_FILENAME
    assert not custom.exists()


def test_storage_config_falls_back_to_xdg_data_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("REPOCATALOG_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = storage.get_storage_config()

    assert config.data_dir == tmp_path / storage.APP_DIR_NAME


def test_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert storage.get_database_config().uri == "sqlite:///override.db"


def test_database_uri_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("REPOCATALOG_DATA_DIR", str(tmp_path / "data-dir"))

    uri = storage.get_database_config().uri

    expected_path = (tmp_path / "data-dir" / storage.CATALOG_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()


def test_identity_cache_lives_in_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("REPOCATALOG_DATA_DIR", str(tmp_path))

    path = storage.get_storage_config().identity_cache_path(ensure=False)

    assert path == tmp_path.resolve() / storage.IDENTITY_CACHE_FILENAME


def test_archive_path_is_per_alias_and_creates_its_directory(tmp_path: Path) -> None:
    config = storage.StorageConfig(data_dir=tmp_path)

    path = config.archive_path("repo")

    assert path == tmp_path.resolve() / storage.ARCHIVE_DIR_NAME / "repo.tar.gz"
    assert path.parent.is_dir()
    assert not path.exists()
