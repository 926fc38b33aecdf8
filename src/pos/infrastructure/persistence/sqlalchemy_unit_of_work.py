"""SQLAlchemy implementation of UnitOfWork: one session, one transaction."""

from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from pos.domain.repository.unit_of_work import UnitOfWork
from pos.infrastructure.persistence.orm import translate_integrity_errors
from pos.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)
from pos.infrastructure.persistence.sqlalchemy_product_repository import (
    SqlAlchemyProductRepository,
)


def session_factory(engine: Engine) -> sessionmaker[Session]:
    # Domain objects are copied out of rows, so nothing needs reloading
    # after commit.
    return sessionmaker(bind=engine, expire_on_commit=False)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlAlchemyProductRepository(self._session)
        self.orders = SqlAlchemyOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._active_session().close()
            self._session = None

    def commit(self) -> None:
        with translate_integrity_errors():
            self._active_session().commit()

    def rollback(self) -> None:
        self._active_session().rollback()

    def _active_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of a 'with' block")
        return self._session
