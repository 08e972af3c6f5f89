"""Transaction scope over the canonical catalog store.

``startup`` binds the module to one engine and creates the catalog table.
Each ``SqlAlchemyCatalogUnitOfWork`` then opens its own session from that
binding; leaving it without ``commit`` discards the changes.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from repocatalog.adapters.sqlalchemy.mappings import create_all_tables
from repocatalog.adapters.sqlalchemy.repositories import SqlAlchemyCanonicalFileRepository
from repocatalog.config import get_database_config
from repocatalog.domain.ports import CatalogRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the catalog store is used before ``startup`` or bound twice."""


_engines: list[Engine] = []
_sessions: list[sessionmaker[Session]] = []


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Bind the catalog store to ``engine`` (or a new one for ``database_uri``)."""

    if _engines and not force:
        raise StartupError("Catalog store already bound; pass force=True to rebind it")

    bound = engine or create_engine(database_uri or get_database_config().uri, future=True)
    create_all_tables(bound)
    _engines[:] = [bound]
    _sessions[:] = [sessionmaker(bind=bound, expire_on_commit=False)]
    log.debug("Catalog store bound to %s", bound.url.render_as_string(hide_password=True))
    return bound


def is_started() -> bool:
    return bool(_engines)


def shutdown() -> None:
    """Dispose the bound engine; later units of work fail until ``startup`` runs again."""

    for engine in _engines:
        engine.dispose()
    _engines.clear()
    _sessions.clear()


class SqlAlchemyCatalogUnitOfWork:
    """One session over the catalog table, exposed as ``CatalogRepositories``."""

    def __init__(self) -> None:
        if not _sessions:
            raise StartupError(
                "Catalog store not bound. Call repocatalog.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        self._session_factory = _sessions[0]
        self._session: Session | None = None
        self._repositories: CatalogRepositories | None = None

    def __enter__(self) -> SqlAlchemyCatalogUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self._session_factory()
        self._repositories = CatalogRepositories(
            files=SqlAlchemyCanonicalFileRepository(self._session)
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not entered")
        return self._session

    @property
    def repositories(self) -> CatalogRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not entered")
        return self._repositories
