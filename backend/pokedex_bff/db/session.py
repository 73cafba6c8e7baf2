from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from pokedex_bff.core.settings import Settings


class Database:
    """Owns the engine (and its connection pool) for one application instance."""

    def __init__(self, url: str, **engine_kwargs) -> None:
        self.url = url
        if url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        self.engine: Engine = create_engine(url, pool_pre_ping=True, **engine_kwargs)

        # Ensure SQLite enforces foreign keys (needed for ondelete=CASCADE).
        if url.startswith("sqlite"):

            @event.listens_for(self.engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, _connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = settings.database_url
        if url.startswith("sqlite"):
            return cls(url)
        # Requests queue for a pooled connection and fail after DB_POOL_TIMEOUT.
        return cls(
            url,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        from pokedex_bff.db.base import Base
        import pokedex_bff.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
