"""Database utilities for the Cardex web API."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from . import config

logger = logging.getLogger(__name__)

engine: Engine | None = None


def create_db_engine(url: str | None = None) -> Engine:
    """Return a new engine for ``url`` (defaults to the configured URL)."""

    url = url or config.database_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=False, connect_args=connect_args)


def get_engine() -> Engine:
    """Return the process engine, opening it on first use."""

    global engine
    if engine is None:
        engine = create_db_engine()
        logger.info("Opened database engine for %s", engine.url.render_as_string(hide_password=True))
    return engine


def dispose_engine() -> None:
    """Close every pooled connection and forget the process engine."""

    global engine
    if engine is None:
        return
    engine.dispose()
    engine = None
    logger.info("Database engine disposed")


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    with Session(get_engine()) as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise


def init_db() -> None:
    """Initialise database tables."""

    # Import models lazily so table metadata is registered before create_all.
    from . import models  # noqa: F401  # pylint: disable=unused-import

    logger.info("Ensuring database tables are created")
    SQLModel.metadata.create_all(get_engine())
    logger.info("Database tables confirmed")


def get_session() -> Iterator[Session]:
    """FastAPI dependency returning a new SQLModel session."""

    with Session(get_engine()) as session:
        yield session
