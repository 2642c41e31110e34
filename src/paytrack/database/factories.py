"""Factory functions for creating database and attachment store instances."""

import os
from pathlib import Path
from typing import Optional

from paytrack.database.attachments import DEFAULT_MAX_BYTES, AttachmentStore
from paytrack.database.memory import InMemoryDatabase
from paytrack.database.sqlalchemy_db import SQLAlchemyDatabase


def _default_home() -> Path:
    home_dir = Path.home() / ".paytrack"
    home_dir.mkdir(exist_ok=True)
    return home_dir


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks PAYTRACK_DB_PATH
            environment variable, then defaults to ~/.paytrack/paytrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("PAYTRACK_DB_PATH")

    if database_path is None:
        database_path = str(_default_home() / "paytrack.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)


def create_memory_database(seed: bool = False) -> InMemoryDatabase:
    """Create an in-memory database, optionally loaded with sample data."""
    db = InMemoryDatabase()
    if seed:
        from paytrack.domain.sample_data import load_sample_data

        load_sample_data(db)
    return db


def create_attachment_store(
    uploads_dir: Optional[str] = None, max_bytes: int = DEFAULT_MAX_BYTES
) -> AttachmentStore:
    """Create the attachment store.

    Args:
        uploads_dir: Directory for stored files. If None, checks PAYTRACK_UPLOADS_DIR
            environment variable, then defaults to ~/.paytrack/uploads
        max_bytes: Largest accepted upload

    Returns:
        AttachmentStore rooted at the uploads directory
    """
    if uploads_dir is None:
        uploads_dir = os.environ.get("PAYTRACK_UPLOADS_DIR")

    if uploads_dir is None:
        uploads_dir = str(_default_home() / "uploads")

    return AttachmentStore(uploads_dir, max_bytes=max_bytes)
