"""Dialect abstractions: CompiledStatement and the SQLDialect ABC.

The Template Method pattern is used:
- ``SQLDialect`` owns the algorithm skeleton for identifier escaping, bind
  placeholders, the LIMIT clause and connection URLs.
- ``MySQLDialect``, ``SQLiteDialect`` and ``PostgresDialect`` override the
  dialect-specific steps (quote character, LIMIT syntax, DBAPI driver).

Placeholders always use the ``:name`` style understood by
``sqlalchemy.text``, which translates them to the driver's own paramstyle.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy.engine import URL

    from bindql.config import ConnectionConfig

#: Whitespace characters trimmed from identifier tokens.
_TRIM_CHARS = " \t\n\r\0\x0b"


@dataclass
class CompiledStatement:
    """The output of a successful statement build.

    Attributes:
        sql: The SQL string with ``:name`` placeholders.
        params: Bind values keyed by placeholder name (without the colon).
        dialect: The dialect the statement was rendered for.
    """

    sql: str
    params: dict[str, Any]
    dialect: str


class SQLDialect(ABC):
    """Abstract base for dialect-specific SQL rendering.

    Subclasses implement the dialect-specific methods; the
    ``StatementBuilder`` and every clause builder go through this interface.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'mysql'``)."""

    @property
    @abstractmethod
    def quote_char(self) -> str:
        """Return the identifier quote character."""

    @property
    @abstractmethod
    def driver(self) -> str:
        """Return the default SQLAlchemy drivername (e.g. ``'mysql+pymysql'``)."""

    #: Port used when the configuration does not name one.
    default_port: int | None = None

    def quote_identifier(self, name: str) -> str:
        """Return a quoted SQL identifier.

        Args:
            name: Unquoted identifier segment.

        Returns:
            Quoted identifier with embedded quote characters doubled.
        """
        q = self.quote_char
        escaped = name.replace(q, q + q)
        return f"{q}{escaped}{q}"

    def escape(self, value: str) -> str:
        """Normalize a column or table token for use as raw SQL text.

        Tokens without a ``.`` qualifier are trimmed and left unquoted.
        Qualified tokens are split on ``.`` and every segment is trimmed of
        whitespace and quote characters and then quoted; a ``*`` segment is
        kept bare so ``users.*`` stays a valid projection.

        Examples (MySQL)::

            escape(" name ")      -> 'name'
            escape("users.name")  -> '`users`.`name`'
            escape("`users`.*")   -> '`users`.*'
        """
        if "." not in value:
            return value.strip()
        strip_chars = _TRIM_CHARS + self.quote_char
        segments = value.strip(strip_chars).split(".")
        quoted: list[str] = []
        for segment in segments:
            segment = segment.strip(strip_chars)
            quoted.append("*" if segment == "*" else self.quote_identifier(segment))
        return ".".join(quoted)

    def placeholder(self, name: str) -> str:
        """Return the SQL placeholder for a bind name."""
        return f":{name}"

    def limit_clause(self, start: str, count: str) -> str:
        """Return the LIMIT clause for the given offset and count placeholders."""
        return f"LIMIT {start}, {count}"

    def url_query(self, config: ConnectionConfig) -> dict[str, str]:
        """Return extra URL query arguments for ``config`` (e.g. charset)."""
        return {}

    def connection_url(self, config: ConnectionConfig) -> URL:
        """Assemble the SQLAlchemy URL for a server-based database."""
        from sqlalchemy.engine import URL

        return URL.create(
            drivername=config.driver or self.driver,
            username=config.user or None,
            password=config.password or None,
            host=config.host or None,
            port=config.port or self.default_port,
            database=config.db_name or None,
            query=self.url_query(config),
        )
