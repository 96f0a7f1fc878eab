"""Lazy connection factory."""
from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import structlog

from bindql.config import ConnectionConfig
from bindql.connect.base import Connector
from bindql.connect.engine import SQLAlchemyConnector

logger = structlog.get_logger(__name__)


class ConnectionFactory:
    """Creates the connector on first use and reuses it afterwards.

    The configuration is consumed once, at construction.  Passing
    ``reconnect=True`` to :meth:`connect` closes the live connector and
    builds a new one from the same configuration.

    Args:
        config: Connection settings, as a model or a plain mapping.
        connector_factory: Optional callable building a connector from the
            configuration.  Defaults to :meth:`SQLAlchemyConnector.from_config`.
    """

    def __init__(
        self,
        config: ConnectionConfig | dict[str, Any],
        connector_factory: Callable[[ConnectionConfig], Connector] | None = None,
    ) -> None:
        self._config = ConnectionConfig.coerce(config)
        self._connector_factory = connector_factory or SQLAlchemyConnector.from_config
        self._connector: Connector | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def connected(self) -> bool:
        return self._connector is not None

    def connect(self, reconnect: bool = False) -> Connector:
        """Return the live connector, creating it when needed.

        Args:
            reconnect: Close the current connector (if any) and create a new one.
        """
        with self._lock:
            if self._connector is not None and not reconnect:
                return self._connector
            if self._connector is not None:
                self._connector.close()
                logger.info("reconnecting", type=self._config.type)
            self._connector = self._connector_factory(self._config)
            logger.info("connected", type=self._config.type)
            return self._connector

    def close(self) -> None:
        """Close the live connector, if any."""
        with self._lock:
            if self._connector is not None:
                self._connector.close()
                self._connector = None
