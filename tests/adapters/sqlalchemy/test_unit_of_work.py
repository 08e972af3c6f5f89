from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from repocatalog.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.files import make_canonical_file

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    assert not is_started()

    with pytest.raises(StartupError):
        SqlAlchemyCatalogUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    assert startup(engine=engine_b, force=True) is engine_b
    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.session.get_bind() is engine_b


def test_unit_of_work_persists_files(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.files.add(make_canonical_file("FI1"))
        uow.commit()

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.files.count() == 1


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError, match="boom"), SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.files.add(make_canonical_file("FI1"))
        raise RuntimeError("boom")

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.files.count() == 0


def test_session_is_only_available_inside_the_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyCatalogUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.session

    with uow:
        assert uow.session is not None

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_unit_of_work_cannot_be_entered_twice(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyCatalogUnitOfWork()

    with uow, pytest.raises(StartupError, match="already entered"):
        uow.__enter__()

    with uow:
        assert uow.repositories.files.count() == 0
