"""Build context objects.

``BuildContext`` is the static configuration shared by every sub-builder of
one :class:`~bindql.build.builder.StatementBuilder`.  ``BindContext`` is the
per-statement bind-value accumulator; a fresh one is created for every
statement so builders stay safe to call concurrently.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from bindql.build.base import SQLDialect

_UNSAFE_BIND_CHARS = re.compile(r"\W")


def bind_name(column: str) -> str:
    """Derive a bind-safe name fragment from a column token.

    ``users.id`` becomes ``users_id``; quote characters and surrounding
    whitespace are dropped first.
    """
    return _UNSAFE_BIND_CHARS.sub("_", column.strip(" \t\n\r\0\x0b`\""))


@dataclass(frozen=True)
class BuildContext:
    """Immutable context for a statement builder.

    Attributes:
        dialect: Dialect used for quoting, placeholders and LIMIT syntax.
    """

    dialect: SQLDialect


@dataclass
class BindContext:
    """Accumulates bind values during a single statement build.

    Every key handed out is unique within the statement: a name that is
    already taken gets a ``_<n>`` suffix.  Numbered names (WHERE binds) use
    a monotonic counter, so the same input always yields the same names.
    """

    params: dict[str, Any] = field(default_factory=dict)
    _counter: int = 0

    def add_value(self, name: str, value: Any) -> str:
        """Store ``value`` under ``name`` (made unique) and return the key."""
        key = name
        suffix = 1
        while key in self.params:
            key = f"{name}_{suffix}"
            suffix += 1
        self.params[key] = value
        return key

    def add_numbered(self, name: str, value: Any) -> str:
        """Store ``value`` under ``<name>_<counter>`` and return the key."""
        key = f"{name}_{self._counter}"
        self._counter += 1
        return self.add_value(key, value)
