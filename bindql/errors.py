"""Custom exception hierarchy for bindql.

All public errors inherit from BindQLError so callers can catch the base
class for any bindql-specific failure.  Driver errors raised while a
statement executes are not wrapped; they reach the caller exactly as the
connector surfaces them.
"""
from __future__ import annotations


class BindQLError(Exception):
    """Base exception for all bindql errors."""


class EmptyPayloadError(BindQLError):
    """Raised when an insert or update is requested with no column data.

    Args:
        operation: The refused operation (``'insert'`` or ``'update'``).
        table: Target table name.
    """

    def __init__(self, operation: str, table: str) -> None:
        super().__init__(f"No data to {operation} into '{table}'.")
        self.operation = operation
        self.table = table


class MissingPredicateError(BindQLError):
    """Raised when a delete is requested without WHERE conditions.

    An unconditional delete is refused before any SQL reaches the connector.

    Args:
        table: Target table name.
    """

    def __init__(self, table: str) -> None:
        super().__init__(f"Delete from '{table}' without a WHERE clause is not allowed.")
        self.table = table


class OptionShapeError(BindQLError):
    """Raised when a condition, join, limit or options value has the wrong shape.

    Args:
        message: Human-readable description.
        option: The option key being built when the error occurred.
    """

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class ConfigError(BindQLError):
    """Raised when a connection configuration cannot be resolved.

    Args:
        message: Human-readable description.
        field: The offending configuration field, when known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
