"""Shared pytest fixtures for bindql unit and integration tests."""
from __future__ import annotations

import pytest

from bindql.build.builder import StatementBuilder
from bindql.build.mysql import MySQLDialect
from bindql.build.postgres import PostgresDialect
from bindql.connect.factory import ConnectionFactory
from bindql.database import Database
from tests.fixtures import ConnectorRecorder


@pytest.fixture()
def mysql() -> StatementBuilder:
    return StatementBuilder(MySQLDialect())


@pytest.fixture()
def pg() -> StatementBuilder:
    return StatementBuilder(PostgresDialect())


@pytest.fixture()
def recorder() -> ConnectorRecorder:
    return ConnectorRecorder()


@pytest.fixture()
def db(recorder: ConnectorRecorder) -> Database:
    """Database wired to recording connectors (MySQL rendering)."""
    return Database(ConnectionFactory({"type": "mysql"}, connector_factory=recorder))
