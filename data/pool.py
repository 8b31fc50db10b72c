"""Bounded pool of reusable SQLite connections."""

import logging
import queue
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from catalog.errors import StorageError

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Hands out at most ``size`` connections, opened lazily on demand.

    A borrower blocks for up to ``timeout`` seconds when every connection is
    in use, then gets a StorageError.
    """

    def __init__(self, db_path: str, size: int = 10, timeout: float = 30.0):
        if size < 1:
            raise ValueError("pool size must be at least 1")
        db_file = Path(db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)
        self.db_path = str(db_file)
        self.size = size
        self.timeout = timeout
        self._idle: queue.LifoQueue = queue.LifoQueue(maxsize=size)
        self._opened = 0
        self._lock = threading.Lock()
        self._closed = False

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _acquire(self) -> sqlite3.Connection:
        if self._closed:
            raise StorageError("connection pool is closed")
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass
        with self._lock:
            if self._opened < self.size:
                self._opened += 1
                try:
                    return self._open()
                except sqlite3.Error as e:
                    self._opened -= 1
                    raise StorageError(f"cannot open database: {e}") from e
        try:
            return self._idle.get(timeout=self.timeout)
        except queue.Empty:
            raise StorageError("connection pool exhausted") from None

    def _release(self, conn: sqlite3.Connection) -> None:
        if self._closed:
            conn.close()
            return
        self._idle.put_nowait(conn)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Borrow a connection for one logical operation.

        Commits on success, rolls back on any error. sqlite3 errors surface as
        StorageError; catalog errors raised inside the block pass through.
        """
        conn = self._acquire()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(str(e)) from e
        except BaseException:
            conn.rollback()
            raise
        finally:
            self._release(conn)

    @property
    def opened(self) -> int:
        """Number of connections opened so far."""
        return self._opened

    def close(self) -> None:
        """Close all idle connections. Borrowed ones close on release."""
        self._closed = True
        while True:
            try:
                conn = self._idle.get_nowait()
            except queue.Empty:
                break
            conn.close()
        logger.debug("Connection pool closed")
