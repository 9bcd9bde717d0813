"""Networked relational backend for shared deployments."""

from sqlalchemy import create_engine

from mindfulme.storage.sql import SqlStorage


def normalize_postgres_url(url: str) -> str:
    """SQLAlchemy only accepts the 'postgresql' scheme name."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgres+psycopg2://"):
        return "postgresql+psycopg2://" + url[len("postgres+psycopg2://"):]
    return url


class PostgresStorage(SqlStorage):
    """PostgreSQL store reached through DATABASE_URL."""

    kind = "postgresql"

    def __init__(self, url: str, echo: bool = False) -> None:
        engine = create_engine(
            normalize_postgres_url(url),
            pool_pre_ping=True,
            echo=echo,
        )
        super().__init__(engine)
