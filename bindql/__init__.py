"""bindql – parameterized SQL statements from plain Python structures.

Describe an INSERT, UPDATE, SELECT or DELETE with dicts and tuples; get back
SQL text with ``:name`` placeholders plus the matching bind mapping, or run
it directly through a SQLAlchemy connection.

Public API
----------
``Database``
    ``insert`` / ``update`` / ``select`` / ``delete`` against a lazily
    created connection.

``StatementBuilder``
    The same four operations returning a ``CompiledStatement`` without
    touching a database.

``connect``
    Shortcut for ``Database.from_config``.

Example::

    db = bindql.connect({"type": "sqlite", "db_name": "shop.db"})
    db.insert("users", {"name": "ann", "age": 30})
    db.select("users", {"where": [("age", ">", 18)], "order": {"name": "asc"},
                        "limit": 10})
    db.delete("users", [("name", "ann")])

Extensibility
-------------
New dialects can be registered via::

    from bindql.build.registry import DialectFactory

    @DialectFactory.register("mariadb")
    class MariaDBDialect(MySQLDialect):
        ...

After registration, ``ConnectionConfig(type="mariadb")`` resolves to it.
"""

from __future__ import annotations

from typing import Any

from bindql.build.base import CompiledStatement, SQLDialect
from bindql.build.builder import StatementBuilder
from bindql.build.mysql import MySQLDialect
from bindql.build.options import Raw, SelectOptions
from bindql.build.postgres import PostgresDialect
from bindql.build.predicate import Condition
from bindql.build.registry import DialectFactory
from bindql.build.sqlite import SQLiteDialect
from bindql.config import ConnectionConfig
from bindql.connect.base import Connector
from bindql.connect.engine import SQLAlchemyConnector
from bindql.connect.factory import ConnectionFactory
from bindql.database import Database, InsertResult
from bindql.errors import (
    BindQLError,
    ConfigError,
    EmptyPayloadError,
    MissingPredicateError,
    OptionShapeError,
)

# ---------------------------------------------------------------------------
# Register built-in dialects with DialectFactory
# ---------------------------------------------------------------------------

DialectFactory.register_class("mysql", MySQLDialect)
DialectFactory.register_class("postgres", PostgresDialect)
DialectFactory.register_class("sqlite", SQLiteDialect)

__all__ = [
    "connect",
    # Orchestration
    "Database",
    "InsertResult",
    # Building
    "StatementBuilder",
    "CompiledStatement",
    "SelectOptions",
    "Raw",
    "Condition",
    # Dialects
    "SQLDialect",
    "DialectFactory",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    # Connections
    "ConnectionConfig",
    "ConnectionFactory",
    "Connector",
    "SQLAlchemyConnector",
    # Errors
    "BindQLError",
    "EmptyPayloadError",
    "MissingPredicateError",
    "OptionShapeError",
    "ConfigError",
]


def connect(config: ConnectionConfig | dict[str, Any]) -> Database:
    """Return a :class:`Database` for ``config``.

    The connection itself is opened lazily, on the first statement.

    Args:
        config: Connection settings, as a model or a plain mapping.

    Raises:
        ConfigError: If ``config`` is invalid or names an unknown type.
    """
    return Database.from_config(config)
