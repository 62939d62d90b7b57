"""
Database engine/session management for the FastAPI backend.

One `Database` is created by `create_app`, opened in the application lifespan
and disposed on shutdown. Request handlers get a session through `get_db`,
which reads the instance from `request.app.state.db`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.db.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and the session factory for one application instance."""

    def __init__(self, url: str, echo: bool = False, engine_options: Optional[Dict[str, Any]] = None):
        self.url = url
        self.echo = echo
        self.engine_options = dict(engine_options or {})
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def open(self) -> None:
        if self._engine is not None:
            return

        options: Dict[str, Any] = {"pool_pre_ping": True, "future": True}
        is_sqlite = self.url.startswith("sqlite")
        if is_sqlite:
            options["connect_args"] = {"check_same_thread": False}
            # In-memory databases live inside a single connection.
            if ":memory:" in self.url or self.url in ("sqlite://", "sqlite+pysqlite://"):
                options["poolclass"] = StaticPool
        options.update(self.engine_options)

        self._engine = create_engine(self.url, echo=self.echo, **options)
        if is_sqlite:
            event.listen(self._engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(
            bind=self._engine, autoflush=False, autocommit=False, expire_on_commit=False
        )
        logger.info("Database engine opened (%s)", self._engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    def create_all(self) -> None:
        """Create every mapped table that does not exist yet."""
        Base.metadata.create_all(self.engine)

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    # PUBLIC_INTERFACE
    def healthcheck(self) -> bool:
        """
        Perform a simple DB liveness check.

        Returns:
            bool: True if DB is reachable and responds to `SELECT 1`, else False.
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, RuntimeError) as exc:
            logger.warning("Database healthcheck failed: %s", exc)
            return False


# PUBLIC_INTERFACE
def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy session and ensures it's closed."""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
