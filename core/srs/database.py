"""
Database - Key-value backends for SRS persistence

The statistics store only needs get/set/delete on string keys.
Two backends are provided:
- InMemoryBackend: dict-backed, for tests and throwaway sessions
- SqlBackend: SQLAlchemy ORM table (SQLite by default, Postgres via DATABASE_URL)

This module handles ONLY storage I/O.
Serialization and defaults are handled by the persistence module.
"""

from __future__ import annotations
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from core.srs.models import Base, KeyValueRecord

# Load environment
load_dotenv()

logger = logging.getLogger(__name__)

# Default SQLite location (used when DATABASE_URL is not set)
DB_DIR = Path(__file__).parent.parent.parent / "logs"


# ---- Configuration ----

def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


def get_database_url() -> str:
    """
    Get the database URL from environment variables.

    Uses DATABASE_URL when set, otherwise a SQLite file under logs/.
    In TEST_MODE the database name 'arabic_vocab' is replaced with
    'test_arabic_vocab' so tests never touch real progress.

    Returns:
        SQLAlchemy connection string
    """
    base_url = os.getenv("DATABASE_URL")
    if not base_url:
        DB_DIR.mkdir(exist_ok=True)
        db_name = "test_arabic_vocab.db" if is_test_mode() else "arabic_vocab.db"
        return f"sqlite:///{DB_DIR / db_name}"

    if is_test_mode():
        return base_url.replace("arabic_vocab", "test_arabic_vocab")

    return base_url


def get_default_user_id() -> str:
    """Get default user id for namespacing stored progress ('' = no namespace)."""
    return os.getenv("DEFAULT_USER_ID", "")


def get_engine(db_url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for database connection.

    Args:
        db_url: Explicit URL (defaults to get_database_url())

    Returns:
        SQLAlchemy Engine instance
    """
    db_url = db_url or get_database_url()
    if db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def init_db(engine: Optional[Engine] = None) -> Engine:
    """
    Initialize database schema if the table doesn't exist.

    Safe to call multiple times - only creates the table if it doesn't exist.
    """
    engine = engine or get_engine()
    existing_tables = inspect(engine).get_table_names()
    if KeyValueRecord.__tablename__ not in existing_tables:
        Base.metadata.create_all(engine)
        logger.info("Created table %s", KeyValueRecord.__tablename__)
    return engine


def reset_db(engine: Optional[Engine] = None) -> Engine:
    """
    DANGEROUS: Delete all stored data and recreate the table.

    Every user's progress and saved sessions will be lost!
    """
    engine = engine or get_engine()
    Base.metadata.drop_all(engine)
    logger.warning("All tables dropped")
    return init_db(engine)


# ---- Backends ----

class KeyValueBackend(ABC):
    """
    Minimal storage contract used by the statistics store.

    Values are strings (JSON documents); writes are synchronous.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key; no-op if absent."""


class InMemoryBackend(KeyValueBackend):
    """Dict-backed storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SqlBackend(KeyValueBackend):
    """
    SQLAlchemy-backed storage: one row per key in the kv_store table.

    Every write commits immediately.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = init_db(engine)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def _session(self) -> Session:
        return self._session_factory()

    def get(self, key: str) -> Optional[str]:
        session = self._session()
        try:
            record = session.get(KeyValueRecord, key)
            return None if record is None else record.value
        finally:
            session.close()

    def set(self, key: str, value: str) -> None:
        session = self._session()
        try:
            record = session.get(KeyValueRecord, key)
            now = datetime.now(timezone.utc)
            if record is None:
                session.add(KeyValueRecord(key=key, value=value, updated_at=now))
            else:
                record.value = value
                record.updated_at = now
            session.commit()
        finally:
            session.close()

    def delete(self, key: str) -> None:
        session = self._session()
        try:
            record = session.get(KeyValueRecord, key)
            if record is not None:
                session.delete(record)
                session.commit()
        finally:
            session.close()

    def keys(self) -> list[str]:
        """All stored keys (used by maintenance scripts)."""
        session = self._session()
        try:
            return [row.key for row in session.query(KeyValueRecord.key).order_by(KeyValueRecord.key)]
        finally:
            session.close()
