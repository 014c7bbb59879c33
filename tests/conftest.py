# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

os.environ.setdefault("DATABASE_URL", "sqlite://")

from fitpulse.db.session import Database, get_db, open_database
from fitpulse.main import app as fastapi_app
from fitpulse.models import ForumPost
from fitpulse.repositories.forum_repo import ForumPostRepository
from fitpulse.services.vote_ledger import VoteLedger


@pytest.fixture()
def database(tmp_path: Path) -> Iterator[Database]:
    """File-backed SQLite database so separate sessions see each other's commits."""
    with open_database(f"sqlite:///{tmp_path / 'fitpulse.db'}", timeout_seconds=10.0) as db:
        db.create_tables()
        yield db


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_ledger(database: Database) -> Iterator[Callable[..., VoteLedger]]:
    """Build ledgers that each own a fresh session."""
    sessions: list[Session] = []

    def _make(**kwargs: object) -> VoteLedger:
        session = database.session()
        sessions.append(session)
        kwargs.setdefault("backoff_seconds", 0)
        return VoteLedger(ForumPostRepository(session), **kwargs)  # type: ignore[arg-type]

    try:
        yield _make
    finally:
        for session in sessions:
            session.close()


@pytest.fixture()
def forum_post(db_session: Session) -> ForumPost:
    """Create a baseline post with no votes."""
    return ForumPostRepository(db_session).create(
        title="Morning HIIT tips",
        body="Share what keeps you going at 6am.",
        author_email="coach@fitpulse.io",
    )


@pytest.fixture()
def read_post(database: Database) -> Callable[[int], ForumPost | None]:
    """Read a post through a brand-new session."""

    def _read(post_id: int) -> ForumPost | None:
        session = database.session()
        try:
            post = ForumPostRepository(session).get_by_id(post_id)
            if post is not None:
                # Load the votes before the session goes away.
                post.voted_user  # noqa: B018
            return post
        finally:
            session.close()

    return _read


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, database: Database) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = database.session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client
