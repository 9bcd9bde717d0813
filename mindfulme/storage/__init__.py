"""Persistence adapter: one Storage interface, backend chosen once at boot."""

import logging
from typing import TYPE_CHECKING

from mindfulme.storage.base import Storage
from mindfulme.storage.postgres import PostgresStorage
from mindfulme.storage.sqlite import SqliteStorage

if TYPE_CHECKING:
    from mindfulme.core.config import Settings

logger = logging.getLogger(__name__)


def create_storage(settings: "Settings") -> Storage:
    """Build the backend selected by settings (SQLite file or Postgres URL)."""
    if settings.database_kind == "postgresql":
        logger.info("Using PostgreSQL storage")
        storage: Storage = PostgresStorage(settings.DATABASE_URL, echo=settings.DEBUG)
    else:
        logger.info("Using SQLite storage", extra={"sqlite_path": settings.SQLITE_DB_PATH})
        storage = SqliteStorage(settings.SQLITE_DB_PATH, echo=settings.DEBUG)
    if settings.DB_AUTO_CREATE:
        storage.create_schema()
    return storage


__all__ = ["PostgresStorage", "SqliteStorage", "Storage", "create_storage"]
