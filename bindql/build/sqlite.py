"""SQLite dialect."""
from __future__ import annotations

from typing import TYPE_CHECKING

from bindql.build.base import SQLDialect

if TYPE_CHECKING:
    from sqlalchemy.engine import URL

    from bindql.config import ConnectionConfig


class SQLiteDialect(SQLDialect):
    """Renders statements for SQLite.

    SQLite accepts MySQL-style backtick quoting and the ``LIMIT offset,
    count`` form, so rendering matches :class:`MySQLDialect`.  Only the
    connection URL differs: it is file based and ignores host, port and
    credentials.  An empty ``db_name`` opens an in-memory database.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    @property
    def quote_char(self) -> str:
        return "`"

    @property
    def driver(self) -> str:
        return "sqlite"

    def connection_url(self, config: ConnectionConfig) -> URL:
        from sqlalchemy.engine import URL

        return URL.create(
            drivername=config.driver or self.driver,
            database=config.db_name or None,
        )
