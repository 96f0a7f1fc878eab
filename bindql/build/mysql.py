"""MySQL dialect."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bindql.build.base import SQLDialect

if TYPE_CHECKING:
    from bindql.config import ConnectionConfig


class MySQLDialect(SQLDialect):
    """Renders statements for MySQL / MariaDB.

    Identifiers are quoted with backticks (`` ` ``).  The LIMIT clause uses
    MySQL's ``LIMIT offset, count`` form.  Connections go through ``PyMySQL``
    by default and carry the configured ``charset`` in the URL.
    """

    default_port = 3306

    @property
    def dialect_name(self) -> str:
        return "mysql"

    @property
    def quote_char(self) -> str:
        return "`"

    @property
    def driver(self) -> str:
        return "mysql+pymysql"

    def url_query(self, config: ConnectionConfig) -> dict[str, str]:
        return {"charset": config.charset} if config.charset else {}
