"""SQLAlchemy-backed units of work for merge, reset and reconcile requests."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from relsync.adapters.sqlalchemy.mappings import start_mappers
from relsync.adapters.sqlalchemy.migrations import upgrade_head
from relsync.adapters.sqlalchemy.repositories import (
    SqlAlchemyContactOwnedRepository,
    SqlAlchemyContactRepository,
    SqlAlchemyDomesticStatusRepository,
    SqlAlchemyNumberOfChildrenRepository,
    SqlAlchemyPrisonerContactRepository,
    SqlAlchemyPrisonerContactRestrictionRepository,
    SqlAlchemyPrisonerRestrictionRepository,
    SqlAlchemyReferenceCodeRepository,
)
from relsync.config import get_database_config
from relsync.domain.model import (
    ContactAddress,
    ContactAddressPhone,
    ContactEmail,
    ContactEmployment,
    ContactIdentity,
    ContactPhone,
    ContactRestriction,
)
from relsync.domain.ports.unit_of_work import RepositoryCollection, SyncRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call relsync.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, metadata, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        database_config = get_database_config()
        engine = create_engine(
            database_uri or database_config.uri,
            future=True,
            **database_config.engine_options(),
        )
    start_mappers()
    upgrade_head(engine=engine)
    log.info("SQLAlchemy adapter started (%s)", engine.url.render_as_string(hide_password=True))
    _STATE.engine = engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            log.debug("Rolling back unit of work after %s", exc_type.__name__)
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemySyncUnitOfWork(BaseSqlAlchemyUnitOfWork[SyncRepositories]):
    """Unit of work managing one session per merge, reset or reconcile request."""

    def _build_repositories(self, session: Session) -> SyncRepositories:
        return SyncRepositories(
            relationships=SqlAlchemyPrisonerContactRepository(session),
            relationship_restrictions=SqlAlchemyPrisonerContactRestrictionRepository(session),
            domestic_statuses=SqlAlchemyDomesticStatusRepository(session),
            number_of_children=SqlAlchemyNumberOfChildrenRepository(session),
            prisoner_restrictions=SqlAlchemyPrisonerRestrictionRepository(session),
            contacts=SqlAlchemyContactRepository(session),
            contact_phones=SqlAlchemyContactOwnedRepository(session, ContactPhone),
            contact_addresses=SqlAlchemyContactOwnedRepository(session, ContactAddress),
            contact_address_phones=SqlAlchemyContactOwnedRepository(session, ContactAddressPhone),
            contact_emails=SqlAlchemyContactOwnedRepository(session, ContactEmail),
            contact_identities=SqlAlchemyContactOwnedRepository(session, ContactIdentity),
            contact_employments=SqlAlchemyContactOwnedRepository(session, ContactEmployment),
            contact_restrictions=SqlAlchemyContactOwnedRepository(session, ContactRestriction),
            reference_codes=SqlAlchemyReferenceCodeRepository(session),
        )


if TYPE_CHECKING:
    from relsync.domain.ports.unit_of_work import SyncUnitOfWork

    _uow_sync_check: SyncUnitOfWork = SqlAlchemySyncUnitOfWork()
