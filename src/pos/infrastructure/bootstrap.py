"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from pos.domain.repository.unit_of_work import UnitOfWork
from pos.infrastructure.config import Settings
from pos.infrastructure.logging_setup import configure_logging
from pos.infrastructure.persistence.orm import create_engine_for
from pos.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
    session_factory,
)


@dataclass(frozen=True)
class Container:
    settings: Settings
    engine: Engine
    sessions: sessionmaker[Session]

    def unit_of_work(self) -> UnitOfWork:
        return SqlAlchemyUnitOfWork(self.sessions)

    @property
    def uow_factory(self) -> Callable[[], UnitOfWork]:
        return self.unit_of_work


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, json=settings.log_json)
    engine = create_engine_for(settings.database_url)
    return Container(settings=settings, engine=engine, sessions=session_factory(engine))


@lru_cache(maxsize=1)
def default_container() -> Container:
    """Process-wide container built from the environment."""
    return build_container()
