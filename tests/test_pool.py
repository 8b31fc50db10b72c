"""Tests for data/pool.py: bounded borrowing, commit/rollback, error mapping."""

import sqlite3
import threading

import pytest

from catalog.errors import NotFound, StorageError
from data.pool import ConnectionPool


@pytest.fixture
def pool(tmp_path):
    p = ConnectionPool(str(tmp_path / "pool.db"), size=2, timeout=0.2)
    with p.connection() as conn:
        conn.execute("CREATE TABLE t (x INTEGER)")
    yield p
    p.close()


def test_connections_are_reused(pool):
    with pool.connection() as first:
        pass
    with pool.connection() as second:
        pass
    assert first is second
    assert pool.opened == 1


def test_foreign_keys_enabled(pool):
    with pool.connection() as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_commit_on_success(pool):
    with pool.connection() as conn:
        conn.execute("INSERT INTO t VALUES (1)")
    with pool.connection() as conn:
        assert conn.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 1


def test_rollback_on_error(pool):
    with pytest.raises(NotFound):
        with pool.connection() as conn:
            conn.execute("INSERT INTO t VALUES (1)")
            raise NotFound("boom")
    with pool.connection() as conn:
        assert conn.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 0


def test_sqlite_error_becomes_storage_error(pool):
    with pytest.raises(StorageError) as exc:
        with pool.connection() as conn:
            conn.execute("SELECT * FROM missing_table")
    assert isinstance(exc.value.__cause__, sqlite3.OperationalError)


def test_exhausted_pool_times_out(pool):
    with pool.connection():
        with pool.connection():
            with pytest.raises(StorageError, match="exhausted"):
                with pool.connection():
                    pass
    assert pool.opened == 2


def test_waiter_gets_released_connection(tmp_path):
    single = ConnectionPool(str(tmp_path / "single.db"), size=1, timeout=2.0)
    got = []

    def waiter():
        with single.connection() as conn:
            got.append(conn)

    with single.connection() as held:
        w = threading.Thread(target=waiter)
        w.start()
    w.join(3)
    single.close()
    assert got == [held]
    assert single.opened == 1


def test_closed_pool_rejects(pool):
    pool.close()
    with pytest.raises(StorageError, match="closed"):
        with pool.connection():
            pass


def test_size_must_be_positive(tmp_path):
    with pytest.raises(ValueError):
        ConnectionPool(str(tmp_path / "x.db"), size=0)
