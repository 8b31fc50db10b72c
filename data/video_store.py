"""
SQLite-backed storage for the video catalog.
Owns every persisted row: videos, categories, and the external users they reference.
"""

import logging
import sqlite3
from typing import Any, Optional

from catalog.errors import ConflictError, StorageError, ValidationError
from catalog.queries import ListingQuery, build_count_query, build_page_query, build_single_query
from data.pool import ConnectionPool
from data.schema import create_tables

logger = logging.getLogger(__name__)


class VideoStore:
    """SQLite database for catalog entries and their categories."""

    _VIDEO_COLUMNS = {
        "title", "description", "src", "type", "poster", "duration",
        "resolution", "size", "status", "category_id", "uploaded_by",
    }

    def __init__(self, db_path: str = "db/catalog.db", pool_size: int = 10,
                 pool_timeout: float = 30.0):
        """Open the connection pool and create the schema."""
        self.pool = ConnectionPool(db_path, size=pool_size, timeout=pool_timeout)
        with self.pool.connection() as conn:
            create_tables(conn)

    def _check_columns(self, columns) -> None:
        unknown = set(columns) - self._VIDEO_COLUMNS
        if unknown:
            raise ValueError(f"Disallowed video columns: {', '.join(sorted(unknown))}")

    @staticmethod
    def _is_foreign_key_error(e: sqlite3.IntegrityError) -> bool:
        return "FOREIGN KEY" in str(e).upper()

    # --- Users (owned externally, stored here for joins) ---

    def create_user(self, username: str) -> int:
        """Insert a user row. Returns the new id."""
        with self.pool.connection() as conn:
            try:
                cursor = conn.execute("INSERT INTO users (username) VALUES (?)", (username,))
            except sqlite3.IntegrityError:
                raise ConflictError(f"user {username!r} already exists") from None
            return cursor.lastrowid

    def get_user(self, user_id: int) -> Optional[dict]:
        with self.pool.connection() as conn:
            row = conn.execute(
                "SELECT id, username, created_at FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            return dict(row) if row else None

    # --- Categories ---

    def find_category(self, name: str) -> Optional[dict]:
        """Exact, case-sensitive lookup by name."""
        with self.pool.connection() as conn:
            row = conn.execute(
                "SELECT id, name FROM categories WHERE name = ?", (name,)
            ).fetchone()
            return dict(row) if row else None

    def insert_category(self, name: str) -> int:
        """Insert a category. Raises ConflictError if the name is taken."""
        with self.pool.connection() as conn:
            try:
                cursor = conn.execute("INSERT INTO categories (name) VALUES (?)", (name,))
            except sqlite3.IntegrityError:
                raise ConflictError(f"category {name!r} already exists") from None
            return cursor.lastrowid

    def get_categories(self) -> list[dict]:
        """All categories, name ascending."""
        with self.pool.connection() as conn:
            cursor = conn.execute("SELECT id, name FROM categories ORDER BY name, id")
            return [dict(row) for row in cursor.fetchall()]

    # --- Videos ---

    def insert_video(self, fields: dict[str, Any]) -> int:
        """Insert a video from a column -> value mapping. Returns the new id."""
        self._check_columns(fields)
        columns = list(fields)
        placeholders = ", ".join("?" for _ in columns)
        with self.pool.connection() as conn:
            try:
                cursor = conn.execute(
                    f"INSERT INTO videos ({', '.join(columns)}) VALUES ({placeholders})",
                    [fields[c] for c in columns],
                )
            except sqlite3.IntegrityError as e:
                if self._is_foreign_key_error(e):
                    raise ValidationError("must reference an existing user",
                                          field="uploaded_by") from e
                raise
            return cursor.lastrowid

    def get_video(self, video_id: int) -> Optional[dict]:
        """Join-enriched video row by id."""
        sql, params = build_single_query(video_id)
        with self.pool.connection() as conn:
            row = conn.execute(sql, params).fetchone()
            return dict(row) if row else None

    def count_videos(self, query: ListingQuery) -> int:
        """Rows matching the listing filter, ignoring the page window."""
        sql, params = build_count_query(query)
        with self.pool.connection() as conn:
            return conn.execute(sql, params).fetchone()[0]

    def list_videos(self, query: ListingQuery) -> list[dict]:
        """One page of join-enriched rows, newest first."""
        sql, params = build_page_query(query)
        with self.pool.connection() as conn:
            cursor = conn.execute(sql, params)
            return [dict(row) for row in cursor.fetchall()]

    def update_video(self, video_id: int, assignments: list[tuple[str, Any]]) -> int:
        """Apply column assignments to one video. Returns the affected row count."""
        if not assignments:
            raise ValueError("update_video needs at least one assignment")
        self._check_columns(column for column, _ in assignments)
        parts = [f"{column} = ?" for column, _ in assignments]
        parts.append("updated_at = datetime('now')")
        params = [value for _, value in assignments]
        params.append(video_id)
        with self.pool.connection() as conn:
            try:
                cursor = conn.execute(
                    f"UPDATE videos SET {', '.join(parts)} WHERE id = ?",
                    params,
                )
            except sqlite3.IntegrityError as e:
                if self._is_foreign_key_error(e):
                    raise ValidationError("must reference an existing user",
                                          field="uploaded_by") from e
                raise
            return cursor.rowcount

    def delete_video(self, video_id: int) -> bool:
        """Physically delete a video. Returns True if a row was removed."""
        with self.pool.connection() as conn:
            cursor = conn.execute("DELETE FROM videos WHERE id = ?", (video_id,))
            return cursor.rowcount > 0

    def ping(self) -> None:
        """Round-trip a trivial query. Raises StorageError if the store is unreachable."""
        with self.pool.connection() as conn:
            if conn.execute("SELECT 1").fetchone()[0] != 1:
                raise StorageError("unexpected ping result")

    def close(self) -> None:
        """Close pooled connections."""
        self.pool.close()
