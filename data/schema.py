"""Table definitions for the catalog database."""

import sqlite3

VIDEO_STATUSES = ("active", "inactive", "archived")

_TABLES = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT NOT NULL UNIQUE,
        created_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        created_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS videos (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title VARCHAR(255) NOT NULL,
        description TEXT,
        src VARCHAR(500) NOT NULL,
        type VARCHAR(100) NOT NULL,
        poster VARCHAR(500),
        duration VARCHAR(8),
        resolution VARCHAR(50),
        size INTEGER CHECK (size IS NULL OR size >= 0),
        status TEXT NOT NULL DEFAULT 'active'
            CHECK (status IN ('active', 'inactive', 'archived')),
        category_id INTEGER REFERENCES categories(id) ON DELETE SET NULL,
        uploaded_by INTEGER REFERENCES users(id) ON DELETE SET NULL,
        created_at TEXT NOT NULL DEFAULT (datetime('now')),
        updated_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_videos_category ON videos(category_id)",
    "CREATE INDEX IF NOT EXISTS idx_videos_created ON videos(created_at, id)",
)


def create_tables(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes if they don't exist."""
    for statement in _TABLES:
        conn.execute(statement)
    conn.commit()
