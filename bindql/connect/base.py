"""Connector contract.

The connector owns the physical connection and statement execution; the
build layer only hands it SQL text and a bind mapping.  Driver errors are
not translated; they propagate from the connector unchanged.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class Connector(ABC):
    """Abstract base for database connectors."""

    @abstractmethod
    def prepare(self, sql: str) -> Any:
        """Return a prepared statement for ``sql``."""

    @abstractmethod
    def execute(self, statement: Any, params: Mapping[str, Any]) -> bool:
        """Execute a prepared write statement.

        Returns:
            ``True`` when the statement executed.
        """

    @abstractmethod
    def insert(
        self,
        statement: Any,
        params: Mapping[str, Any],
        name: str | None = None,
    ) -> tuple[bool, str]:
        """Execute a prepared insert and read the id it generated.

        Both steps run as one unit: no other statement on this connector
        may run between the insert and the id lookup.

        Returns:
            ``(success, last_id)`` with ``last_id`` as in
            :meth:`last_insert_id`.
        """

    @abstractmethod
    def fetch_all(
        self,
        statement: Any,
        params: Mapping[str, Any],
        column: bool = False,
    ) -> list[Any]:
        """Execute a prepared query and return every row.

        Args:
            statement: A statement returned by :meth:`prepare`.
            params: Bind values keyed by placeholder name.
            column: Return a flat list of the first column instead of row
                mappings.
        """

    @abstractmethod
    def last_insert_id(self, name: str | None = None) -> str:
        """Return the id generated by the last write as a string.

        Another caller may have written in between; use :meth:`insert`
        when the id must belong to a specific statement.

        Args:
            name: Sequence name for databases that need one (PostgreSQL).
        """

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection."""
