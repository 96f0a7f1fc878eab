"""PostgreSQL dialect."""

from __future__ import annotations

from bindql.build.base import SQLDialect


class PostgresDialect(SQLDialect):
    """Renders statements for PostgreSQL.

    Identifiers are quoted with double quotes.  PostgreSQL has no
    ``LIMIT offset, count`` form, so the same ``l_start`` / ``l_offset``
    binds are rendered as ``LIMIT :l_offset OFFSET :l_start``.

    The configured ``charset`` is ignored: its default (``utf8mb4``) is a
    MySQL name and PostgreSQL negotiates the client encoding itself.
    """

    default_port = 5432

    @property
    def dialect_name(self) -> str:
        return "postgres"

    @property
    def quote_char(self) -> str:
        return '"'

    @property
    def driver(self) -> str:
        return "postgresql+psycopg"

    def limit_clause(self, start: str, count: str) -> str:
        return f"LIMIT {count} OFFSET {start}"
