from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Depends, Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


class Database:
    """Storage handle owning the engine and its bounded connection pool.

    Built once at startup and attached to ``app.state``. Request handlers get a
    session through :func:`get_db`; the session's connection goes back to the
    pool when the request finishes.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        pool_timeout: float = 30.0,
        **engine_kwargs: Any,
    ):
        self.url = url
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout
        self._engine_kwargs = engine_kwargs
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    def init_app(self) -> None:
        if self._engine is not None:
            return
        options: dict[str, Any] = {"pool_pre_ping": True}
        if "poolclass" not in self._engine_kwargs:
            options.update(
                pool_size=self.pool_size,
                max_overflow=0,
                pool_timeout=self.pool_timeout,
            )
        options.update(self._engine_kwargs)
        self._engine = create_engine(self.url, **options)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self._engine)

    @property
    def engine(self) -> Engine:
        self.init_app()
        assert self._engine is not None
        return self._engine

    def session(self) -> Generator[Session, None, None]:
        self.init_app()
        assert self._session_factory is not None
        db = self._session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def check_connection(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error("database connection check failed: %s", exc)
            return False
        return True

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    yield from database.session()
