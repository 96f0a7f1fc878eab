"""SQLAlchemy-backed connector."""
from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.sql.elements import TextClause

from bindql.config import ConnectionConfig
from bindql.connect.base import Connector

logger = structlog.get_logger(__name__)


class SQLAlchemyConnector(Connector):
    """Runs statements on a single live SQLAlchemy connection.

    The connection is opened on first use in ``AUTOCOMMIT`` mode, so each
    write is committed as soon as it executes.  Statement execution is
    serialized with a lock because the connection is shared.

    Args:
        engine: Engine the connection is drawn from.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._conn: Connection | None = None
        self._last_result: CursorResult | None = None
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> SQLAlchemyConnector:
        """Create a connector with a new engine built from ``config``."""
        url = config.to_url()
        logger.info("engine_created", url=url.render_as_string(hide_password=True))
        return cls(create_engine(url, **config.engine_options()))

    @property
    def engine(self) -> Engine:
        return self._engine

    def _connection(self) -> Connection:
        if self._conn is None or self._conn.closed:
            self._conn = self._engine.connect().execution_options(isolation_level="AUTOCOMMIT")
        return self._conn

    def prepare(self, sql: str) -> TextClause:
        return text(sql)

    def execute(self, statement: TextClause, params: Mapping[str, Any]) -> bool:
        with self._lock:
            self._last_result = self._connection().execute(statement, dict(params))
        return True

    def insert(
        self,
        statement: TextClause,
        params: Mapping[str, Any],
        name: str | None = None,
    ) -> tuple[bool, str]:
        with self._lock:
            result = self._connection().execute(statement, dict(params))
            self._last_result = result
            return True, self._read_id(result, name)

    def fetch_all(
        self,
        statement: TextClause,
        params: Mapping[str, Any],
        column: bool = False,
    ) -> list[Any]:
        with self._lock:
            result = self._connection().execute(statement, dict(params))
            if column:
                return list(result.scalars().all())
            return [dict(row) for row in result.mappings().all()]

    def last_insert_id(self, name: str | None = None) -> str:
        """Return the last generated id.

        With ``name`` on PostgreSQL, ``currval(name)`` is
        read on the same connection; otherwise the cursor's ``lastrowid``
        from the last write is used.  Returns ``""`` when nothing
        was generated.
        """
        with self._lock:
            return self._read_id(self._last_result, name)

    def _read_id(self, result: CursorResult | None, name: str | None) -> str:
        if name and self._engine.dialect.name == "postgresql":
            value = self._connection().execute(text("SELECT currval(:name)"), {"name": name}).scalar()
        elif result is not None:
            value = result.lastrowid
        else:
            value = None
        return "" if value is None else str(value)

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            self._last_result = None
            self._engine.dispose()
