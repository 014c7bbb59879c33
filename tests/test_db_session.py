"""Tests for the database handle and its driver bounds."""

from sqlalchemy.pool import StaticPool

from fitpulse.db.session import _engine_options, open_database


def test_file_sqlite_pool_wait_uses_store_timeout(tmp_path) -> None:
    with open_database(f"sqlite:///{tmp_path / 'bounded.db'}", timeout_seconds=2.5) as database:
        assert database.engine.pool.timeout() == 2.5


def test_file_sqlite_options() -> None:
    options = _engine_options("sqlite:///./fitpulse.db", 3.0)
    assert options["pool_timeout"] == 3.0
    assert options["connect_args"]["timeout"] == 3.0


def test_memory_sqlite_uses_static_pool() -> None:
    options = _engine_options("sqlite://", 3.0)
    assert options["poolclass"] is StaticPool
    assert "pool_timeout" not in options


def test_postgres_options_bound_statements_and_pool() -> None:
    options = _engine_options("postgresql+psycopg://fit:pulse@db/fitpulse", 1.5)
    assert options["pool_timeout"] == 1.5
    assert options["connect_args"] == {"options": "-c statement_timeout=1500"}
