"""Database engine and session management for the key/value store.

The store keeps one row per key (see ``tracker.models.store_entry``), so the
engine only needs the SQLite pragmas that make whole-value rewrites safe:

    - **WAL (Write-Ahead Logging)**: readers are not blocked while a
      collection is being rewritten.
    - **check_same_thread=False**: FastAPI may hand a connection created in
      one thread to another.
"""

from sqlalchemy import event as sa_event
from sqlmodel import SQLModel, create_engine

from tracker.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_db_and_tables(bind=None):
    """Create all database tables."""
    SQLModel.metadata.create_all(bind or engine)
