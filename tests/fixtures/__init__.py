"""Test fixtures: an in-memory recording connector."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from bindql.config import ConnectionConfig
from bindql.connect.base import Connector


@dataclass
class RecordingConnector(Connector):
    """Connector double that records every call instead of running SQL.

    Attributes:
        rows: Rows returned by :meth:`fetch_all`.
        last_id: Value returned by :meth:`insert` and :meth:`last_insert_id`.
        calls: ``(method, args)`` tuples in call order.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    last_id: str = "7"
    calls: list[tuple[str, tuple]] = field(default_factory=list)
    closed: bool = False

    def prepare(self, sql: str) -> str:
        self.calls.append(("prepare", (sql,)))
        return sql

    def execute(self, statement: Any, params: Mapping[str, Any]) -> bool:
        self.calls.append(("execute", (statement, dict(params))))
        return True

    def insert(self, statement: Any, params: Mapping[str, Any], name: str | None = None) -> tuple[bool, str]:
        self.calls.append(("insert", (statement, dict(params), name)))
        return True, self.last_id

    def fetch_all(self, statement: Any, params: Mapping[str, Any], column: bool = False) -> list[Any]:
        self.calls.append(("fetch_all", (statement, dict(params), column)))
        if column:
            return [next(iter(row.values())) for row in self.rows]
        return list(self.rows)

    def last_insert_id(self, name: str | None = None) -> str:
        self.calls.append(("last_insert_id", (name,)))
        return self.last_id

    def close(self) -> None:
        self.closed = True

    @property
    def sql(self) -> list[str]:
        """SQL text of every prepared statement."""
        return [args[0] for method, args in self.calls if method == "prepare"]


class ConnectorRecorder:
    """``connector_factory`` that hands out a new RecordingConnector per call."""

    def __init__(self) -> None:
        self.created: list[RecordingConnector] = []
        self.configs: list[ConnectionConfig] = []

    def __call__(self, config: ConnectionConfig) -> RecordingConnector:
        connector = RecordingConnector()
        self.created.append(connector)
        self.configs.append(config)
        return connector
