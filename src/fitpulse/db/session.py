"""Database connection handle and session helpers."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _engine_options(url: str, timeout_seconds: float) -> dict[str, Any]:
    """Return driver options that bound every store call by ``timeout_seconds``."""
    backend = make_url(url).get_backend_name()
    if backend == "sqlite":
        options: dict[str, Any] = {
            "connect_args": {"check_same_thread": False, "timeout": timeout_seconds},
        }
        if make_url(url).database in (None, "", ":memory:"):
            # In-memory databases live and die with their single connection.
            options["poolclass"] = StaticPool
        else:
            options["pool_timeout"] = timeout_seconds
        return options

    options = {"pool_pre_ping": True, "pool_timeout": timeout_seconds}
    if backend == "postgresql":
        statement_timeout_ms = int(timeout_seconds * 1000)
        options["connect_args"] = {"options": f"-c statement_timeout={statement_timeout_ms}"}
    return options


class Database:
    """Explicitly owned store connection: one engine and its session factory.

    Acquire it with :func:`open_database` and hand it to whatever needs
    sessions; the engine is disposed when the owning scope exits.
    """

    def __init__(self, url: str, *, timeout_seconds: float = 5.0, echo: bool = False) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.engine: Engine = create_engine(
            url,
            echo=echo,
            **_engine_options(url, timeout_seconds),
        )
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def session(self) -> Session:
        """Return a new session bound to this database."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all tables registered on :class:`Base`."""
        # Ensure model modules are imported so that metadata is populated.
        import fitpulse.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all tables registered on :class:`Base`."""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()


@contextmanager
def open_database(
    url: str,
    *,
    timeout_seconds: float = 5.0,
    echo: bool = False,
) -> Iterator[Database]:
    """Open a :class:`Database` for the duration of the ``with`` block."""
    database = Database(url, timeout_seconds=timeout_seconds, echo=echo)
    logger.info("Opened database %s", make_url(url).render_as_string(hide_password=True))
    try:
        yield database
    finally:
        database.dispose()
        logger.info("Closed database connections")


def get_database(request: Request) -> Database:
    """Return the database handle owned by the running application."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
