"""bindql build layer: structured input → parameterized SQL."""
from bindql.build.base import CompiledStatement, SQLDialect
from bindql.build.builder import StatementBuilder
from bindql.build.mysql import MySQLDialect
from bindql.build.options import Raw, SelectOptions
from bindql.build.postgres import PostgresDialect
from bindql.build.predicate import Condition
from bindql.build.sqlite import SQLiteDialect

__all__ = [
    "CompiledStatement",
    "SQLDialect",
    "StatementBuilder",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "SelectOptions",
    "Raw",
    "Condition",
]
