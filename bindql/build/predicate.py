"""WHERE predicate builder.

Conditions are plain sequences so callers can write them inline::

    [("status", "active"),                  # operator defaults to '='
     ("age", ">=", 18, "and"),              # connector before this condition
     ("users.role", "!=", "guest", "OR")]

The connector is matched case-insensitively against ``AND``, ``OR`` and
``NOT``; anything else is dropped and no keyword is emitted.  Operators are
passed through verbatim.  Values are always bound, never inlined.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from bindql.build.context import BindContext, BuildContext, bind_name
from bindql.errors import OptionShapeError

#: Boolean connectors allowed in front of a condition.
CONNECTORS: frozenset[str] = frozenset({"AND", "OR", "NOT"})


@dataclass(frozen=True)
class Condition:
    """A single normalized WHERE condition.

    Attributes:
        column: Column token (escaped when rendered).
        operator: Comparison operator, passed through verbatim.
        value: Literal value, always bound.
        connector: Upper-cased connector, or ``None`` when absent or unknown.
    """

    column: str
    operator: str
    value: Any
    connector: str | None = None

    @classmethod
    def from_sequence(cls, item: Condition | Sequence[Any]) -> Condition:
        """Normalize a 2-, 3- or 4-element condition sequence.

        Raises:
            OptionShapeError: If ``item`` is not a sequence of 2 to 4 elements.
        """
        if isinstance(item, Condition):
            return item
        if isinstance(item, (str, bytes)) or not isinstance(item, Sequence):
            raise OptionShapeError(
                f"A condition must be a sequence, got {item!r}.", option="where"
            )
        if len(item) == 2:
            column, value = item
            return cls(column=column, operator="=", value=value)
        if len(item) == 3:
            column, operator, value = item
            return cls(column=column, operator=operator, value=value)
        if len(item) == 4:
            column, operator, value, connector = item
            return cls(
                column=column,
                operator=operator,
                value=value,
                connector=_normalize_connector(connector),
            )
        raise OptionShapeError(
            f"A condition needs 2 to 4 elements, got {len(item)}: {item!r}.",
            option="where",
        )


def _normalize_connector(connector: Any) -> str | None:
    if connector is None:
        return None
    keyword = str(connector).strip().upper()
    return keyword if keyword in CONNECTORS else None


class PredicateBuilder:
    """Compiles a condition list to WHERE tokens and bind values.

    Args:
        ctx: Static build context.
        binds: Shared bind accumulator for the statement.
    """

    def __init__(self, ctx: BuildContext, binds: BindContext) -> None:
        self._ctx = ctx
        self._binds = binds

    def build(self, conditions: Iterable[Condition | Sequence[Any]]) -> list[str]:
        """Return ``['WHERE', <tokens>...]``, or ``[]`` for no conditions.

        Each condition contributes its optional connector, the escaped
        column, the operator and a ``:w_<column>_<n>`` placeholder.
        """
        dialect = self._ctx.dialect
        tokens: list[str] = []
        for item in conditions:
            cond = Condition.from_sequence(item)
            name = self._binds.add_numbered(f"w_{bind_name(cond.column)}", cond.value)
            if cond.connector is not None:
                tokens.append(cond.connector)
            tokens.append(dialect.escape(cond.column))
            tokens.append(str(cond.operator))
            tokens.append(dialect.placeholder(name))
        return ["WHERE", *tokens] if tokens else []

    def build_clause(self, conditions: Iterable[Condition | Sequence[Any]]) -> str:
        """Return the WHERE clause as a single string (empty for none)."""
        return " ".join(self.build(conditions))
