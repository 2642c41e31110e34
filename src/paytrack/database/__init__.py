"""Database layer for paytrack application."""

from paytrack.database.base import Database
from paytrack.database.attachments import AttachmentStore
from paytrack.database.factories import (
    create_attachment_store,
    create_memory_database,
    create_sqlite_database,
)

__all__ = [
    "Database",
    "AttachmentStore",
    "create_attachment_store",
    "create_memory_database",
    "create_sqlite_database",
]
