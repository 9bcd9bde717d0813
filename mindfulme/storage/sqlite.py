"""File-based single-writer backend for local development and tests."""

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from mindfulme.storage.sql import SqlStorage

MEMORY_PATH = ":memory:"


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SqliteStorage(SqlStorage):
    """SQLite store at `path`; ':memory:' keeps one shared in-process connection."""

    kind = "sqlite"

    def __init__(self, path: str, echo: bool = False) -> None:
        connect_args = {"check_same_thread": False}
        if path == MEMORY_PATH:
            engine = create_engine(
                "sqlite://",
                connect_args=connect_args,
                poolclass=StaticPool,
                echo=echo,
            )
        else:
            Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)
            engine = create_engine(
                f"sqlite:///{Path(path).expanduser()}",
                connect_args=connect_args,
                echo=echo,
            )
        event.listen(engine, "connect", _enable_foreign_keys)
        self.path = path
        super().__init__(engine)
