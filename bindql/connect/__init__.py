"""bindql connection layer: connector contract and SQLAlchemy implementation."""
from bindql.connect.base import Connector
from bindql.connect.engine import SQLAlchemyConnector
from bindql.connect.factory import ConnectionFactory

__all__ = ["Connector", "SQLAlchemyConnector", "ConnectionFactory"]
