"""Lookup of SQL dialects by the ``type`` key of a connection config.

``bindql`` registers ``mysql``, ``postgres`` and ``sqlite`` on import.  A
dialect registered here can be named in ``ConnectionConfig.type``::

    @DialectFactory.register("mariadb")
    class MariaDBDialect(MySQLDialect):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from bindql.build.base import SQLDialect
from bindql.errors import ConfigError


class DialectFactory:
    """Maps config ``type`` names to dialect classes.

    Lookups are exact: ``ConnectionConfig`` lower-cases ``type`` before it
    gets here.
    """

    _dialects: ClassVar[dict[str, type[SQLDialect]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLDialect]], type[SQLDialect]]:
        """Class decorator form of :meth:`register_class`."""

        def decorator(dialect_cls: type[SQLDialect]) -> type[SQLDialect]:
            cls._dialects[name] = dialect_cls
            return dialect_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, dialect_cls: type[SQLDialect]) -> None:
        cls._dialects[name] = dialect_cls

    @classmethod
    def create(cls, name: str) -> SQLDialect:
        """Return a new dialect for ``name``.

        Raises:
            ConfigError: With ``field="type"`` when ``name`` is unknown.
        """
        dialect_cls = cls._dialects.get(name)
        if dialect_cls is None:
            raise ConfigError(
                f"Unsupported database type: '{name}'. Registered types: {sorted(cls._dialects)}.",
                field="type",
            )
        return dialect_cls()

    @classmethod
    def registered_types(cls) -> list[str]:
        return sorted(cls._dialects)
