"""INSERT / UPDATE payload binding."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bindql.build.context import BindContext, BuildContext, bind_name


class DataBinder:
    """Binds a column-value mapping for INSERT and UPDATE statements.

    Every value is registered in the :class:`BindContext` under a
    ``d_<column>`` key; the SQL text only ever sees the placeholder, never
    the value.

    Args:
        ctx: Static build context.
        binds: Bind accumulator for the statement being built.
    """

    def __init__(self, ctx: BuildContext, binds: BindContext) -> None:
        self._ctx = ctx
        self._binds = binds

    def bind(self, data: Mapping[str, Any]) -> dict[str, str]:
        """Bind ``data`` and return a placeholder -> escaped column mapping.

        Example (MySQL)::

            bind({"name": "ann", "users.age": 30})
            # {":d_name": "name", ":d_users_age": "`users`.`age`"}
            # binds.params == {"d_name": "ann", "d_users_age": 30}
        """
        dialect = self._ctx.dialect
        columns: dict[str, str] = {}
        for column, value in data.items():
            name = self._binds.add_value(f"d_{bind_name(column)}", value)
            columns[dialect.placeholder(name)] = dialect.escape(column)
        return columns

    def columns_values(self, data: Mapping[str, Any]) -> str:
        """Render ``(col, ...) VALUES(:d_col, ...)`` for an INSERT."""
        columns = self.bind(data)
        return f"({', '.join(columns.values())}) VALUES({', '.join(columns)})"

    def assignments(self, data: Mapping[str, Any]) -> str:
        """Render ``col = :d_col, ...`` for an UPDATE ``SET`` list."""
        columns = self.bind(data)
        return ", ".join(f"{column} = {placeholder}" for placeholder, column in columns.items())
