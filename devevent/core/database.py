"""Process-wide database handle.

The engine is established lazily on first use and probed once. Concurrent
first callers coalesce onto the single in-flight attempt and share its result;
a failed attempt is not cached, so the next caller tries again.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Optional

import sqlalchemy as sa
from flask import current_app
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from devevent.errors import DatabaseUnavailableError
from devevent.extensions import db

logger = logging.getLogger(__name__)

Connector = Callable[[], Engine]


class DatabaseHandle:
    def __init__(self, connector: Connector) -> None:
        self._connector = connector
        self._lock = threading.Lock()
        self._engine: Optional[Engine] = None
        self._inflight: Optional[Future] = None

    @property
    def connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> Engine:
        """Return the cached engine, establishing it on the first call."""
        engine = self._engine
        if engine is not None:
            return engine

        with self._lock:
            if self._engine is not None:
                return self._engine
            future = self._inflight
            leader = future is None
            if leader:
                future = self._inflight = Future()

        if not leader:
            return future.result()

        try:
            engine = self._connector()
        except BaseException as exc:
            # Followers must be released whatever the connector raised.
            error = exc
            if isinstance(exc, SQLAlchemyError):
                logger.exception("Database connection failed")
                error = DatabaseUnavailableError()
                error.__cause__ = exc
            else:
                logger.exception("Database connector raised %s", type(exc).__name__)
            with self._lock:
                self._inflight = None
            future.set_exception(error)
            if error is exc:
                raise
            raise error from exc

        with self._lock:
            self._engine = engine
            self._inflight = None
        future.set_result(engine)
        return engine

    def reset(self) -> None:
        with self._lock:
            self._engine = None


def _probe_engine() -> Engine:
    engine = db.engine
    with engine.connect() as connection:
        connection.execute(sa.text("SELECT 1"))
    logger.info("Database connection established (%s)", engine.url.get_backend_name())
    return engine


def init_database(app, connector: Connector = _probe_engine) -> DatabaseHandle:
    handle = DatabaseHandle(connector)
    app.extensions["database"] = handle
    return handle


def connect() -> Engine:
    """Connect the current app's database, reusing the established engine."""
    return current_app.extensions["database"].connect()
