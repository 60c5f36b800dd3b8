"""Database engine setup for SQLite with WAL mode.

SQLite holds the content store: WAL mode for concurrent reads, ACID
transactions for field writes.  The DB is stored at the configured
``[store] path`` (default ``{root}/.licwatch/content.db``).

SQLAlchemy Core (not ORM) is used because raw items are read through
thin row adapters — no benefit from session management or identity maps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from licwatch.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path | None) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled.

    ``None`` gives a private in-memory database.
    """
    if db_path is None:
        engine = create_engine(
            "sqlite://",
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        if db_path is not None:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path | None) -> Engine:
    """Initialize the content store at *db_path*.

    Creates the parent directory and all tables from :data:`schema.metadata`.
    Idempotent — safe to call on an existing store.

    Returns the engine ready for use.
    """
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
