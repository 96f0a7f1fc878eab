"""Statement orchestrator: insert / update / select / delete.

``Database`` builds each statement with :class:`StatementBuilder` first and
only then touches the connector, so a refused call (empty payload, missing
delete predicate, malformed options) never reaches the database.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple

import structlog

from bindql.build.base import SQLDialect
from bindql.build.builder import Conditions, StatementBuilder
from bindql.build.options import SelectOptions
from bindql.config import ConnectionConfig
from bindql.connect.base import Connector
from bindql.connect.factory import ConnectionFactory

logger = structlog.get_logger(__name__)


class InsertResult(NamedTuple):
    """Outcome of :meth:`Database.insert`.

    Attributes:
        success: Whether the statement executed.
        last_id: Id generated by the insert, as a string (``""`` if none).
    """

    success: bool
    last_id: str


class Database:
    """Runs built statements through a lazily created connector.

    Args:
        factory: Connection factory owning the live connector.
        dialect: Rendering dialect; resolved from the factory's
            configuration ``type`` when omitted.
    """

    def __init__(self, factory: ConnectionFactory, dialect: SQLDialect | None = None) -> None:
        self._factory = factory
        self._builder = StatementBuilder(dialect or factory.config.dialect())

    @classmethod
    def from_config(cls, config: ConnectionConfig | dict[str, Any]) -> Database:
        """Create a ``Database`` backed by the default SQLAlchemy connector."""
        return cls(ConnectionFactory(config))

    @property
    def builder(self) -> StatementBuilder:
        return self._builder

    @property
    def factory(self) -> ConnectionFactory:
        return self._factory

    def _connector(self) -> Connector:
        return self._factory.connect()

    def insert(
        self,
        table: str,
        data: Mapping[str, Any],
        last_id_name: str | None = None,
    ) -> InsertResult:
        """Insert one row.

        Args:
            table: Target table.
            data: Column -> value mapping; must not be empty.
            last_id_name: Sequence / column name used to look up the
                generated id; the driver default when omitted.  The id is
                read together with the insert, so concurrent writes on the
                same connector cannot change it.

        Raises:
            EmptyPayloadError: If ``data`` is empty.
        """
        stmt = self._builder.insert(table, data)
        connector = self._connector()
        success, last_id = connector.insert(connector.prepare(stmt.sql), stmt.params, last_id_name)
        return InsertResult(success=success, last_id=last_id)

    def update(self, table: str, data: Mapping[str, Any], where: Conditions = ()) -> bool:
        """Update rows matching ``where``.

        Raises:
            EmptyPayloadError: If ``data`` is empty.
        """
        stmt = self._builder.update(table, data, where)
        connector = self._connector()
        return connector.execute(connector.prepare(stmt.sql), stmt.params)

    def select(
        self,
        table: str,
        options: SelectOptions | Mapping[str, Any] | None = None,
        column: bool = False,
    ) -> list[Any]:
        """Select rows.

        Args:
            table: Table to read.
            options: ``field`` / ``join`` / ``where`` / ``order`` / ``group``
                / ``limit`` options, see :class:`SelectOptions`.
            column: Return a flat list of the first column's values instead
                of row dicts.
        """
        stmt = self._builder.select(table, options)
        connector = self._connector()
        return connector.fetch_all(connector.prepare(stmt.sql), stmt.params, column=column)

    def delete(self, table: str, where: Conditions) -> bool:
        """Delete rows matching ``where``.

        Raises:
            MissingPredicateError: If ``where`` is empty.
        """
        stmt = self._builder.delete(table, where)
        connector = self._connector()
        return connector.execute(connector.prepare(stmt.sql), stmt.params)

    def reconnect(self) -> None:
        """Drop the live connection and open a new one from the same config."""
        self._factory.connect(reconnect=True)

    def close(self) -> None:
        self._factory.close()
