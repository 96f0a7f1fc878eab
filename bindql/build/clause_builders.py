"""Clause-level SQL builders for SELECT options.

Each class handles exactly one clause and accepts either the structured
form of its option or a raw, trusted SQL fragment (``build_raw``).  Builders
return an empty string when a structured value produces nothing, so the
composer can simply drop it.

Classes
-------
FieldClauseBuilder   - projection list (``*`` when empty)
JoinClauseBuilder    - ``<TYPE> JOIN <table> ON <left> <op> <right>``
WhereClauseBuilder   - ``WHERE ...`` via :class:`PredicateBuilder`
GroupClauseBuilder   - ``GROUP BY ...``
OrderClauseBuilder   - ``ORDER BY <col> <ASC|DESC>, ...``
LimitClauseBuilder   - ``LIMIT :l_start, :l_offset`` (dialect specific)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from bindql.build.context import BindContext, BuildContext
from bindql.build.predicate import PredicateBuilder
from bindql.errors import OptionShapeError

#: Join types accepted as-is; anything else becomes INNER.
JOIN_TYPES: frozenset[str] = frozenset({"INNER", "LEFT", "RIGHT"})

#: Sort directions accepted as-is; anything else becomes DESC.
DIRECTIONS: frozenset[str] = frozenset({"ASC", "DESC"})


class ClauseBuilder(ABC):
    """Base for option clause builders.

    Subclasses set ``keyword`` and implement :meth:`build`.  The default
    :meth:`build_raw` prefixes the raw fragment with the keyword.
    """

    keyword: ClassVar[str] = ""

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    @abstractmethod
    def build(self, value: Any) -> str:
        """Render the structured form of the option."""

    def build_raw(self, sql: str) -> str:
        return f"{self.keyword} {sql}"


class FieldClauseBuilder(ClauseBuilder):
    """Builds the projection list that follows ``SELECT``."""

    def build(self, fields: Sequence[str]) -> str:
        columns = [self._ctx.dialect.escape(f) for f in fields]
        return ", ".join(columns) if columns else "*"

    def build_raw(self, sql: str) -> str:
        return sql


class JoinClauseBuilder(ClauseBuilder):
    """Builds ``JOIN`` fragments from a table -> join-spec mapping.

    A spec is ``(left, right)``, ``(left, op, right)`` or
    ``(left, op, right, type)``.  ``left`` and ``right`` are raw SQL
    expressions rendered with ``str()``; only the joined table name is
    escaped.
    """

    keyword = "INNER JOIN"

    def build(self, joins: Mapping[str, Sequence[Any]]) -> str:
        parts = [self._build_one(table, spec) for table, spec in joins.items()]
        return " ".join(parts)

    def build_raw(self, sql: str) -> str:
        return sql if "JOIN" in sql.upper() else f"{self.keyword} {sql}"

    def _build_one(self, table: str, spec: Sequence[Any]) -> str:
        if isinstance(spec, str) or len(spec) not in (2, 3, 4):
            raise OptionShapeError(
                f"Join spec for '{table}' needs 2 to 4 elements, got {spec!r}.",
                option="join",
            )
        if len(spec) == 2:
            left, right = spec
            operator, join_type = "=", None
        else:
            left, operator, right = spec[:3]
            join_type = spec[3] if len(spec) == 4 else None
        join_type = str(join_type).strip().upper() if join_type is not None else "INNER"
        if join_type not in JOIN_TYPES:
            join_type = "INNER"
        table_sql = self._ctx.dialect.escape(table)
        return f"{join_type} JOIN {table_sql} ON {left} {operator} {right}"


class WhereClauseBuilder(ClauseBuilder):
    """Delegates structured conditions to :class:`PredicateBuilder`."""

    keyword = "WHERE"

    def __init__(self, ctx: BuildContext, predicate_builder: PredicateBuilder) -> None:
        super().__init__(ctx)
        self._pred = predicate_builder

    def build(self, conditions: Sequence[Any]) -> str:
        return self._pred.build_clause(conditions)


class GroupClauseBuilder(ClauseBuilder):
    keyword = "GROUP BY"

    def build(self, columns: Sequence[str]) -> str:
        if not columns:
            return ""
        return f"{self.keyword} {', '.join(self._ctx.dialect.escape(c) for c in columns)}"


class OrderClauseBuilder(ClauseBuilder):
    """Builds ``ORDER BY`` from a column -> direction mapping."""

    keyword = "ORDER BY"

    def build(self, order: Mapping[str, str | None]) -> str:
        parts: list[str] = []
        for column, direction in order.items():
            direction = str(direction).strip().upper() if direction is not None else "DESC"
            if direction not in DIRECTIONS:
                direction = "DESC"
            parts.append(f"{self._ctx.dialect.escape(column)} {direction}")
        return f"{self.keyword} {', '.join(parts)}" if parts else ""


class LimitClauseBuilder(ClauseBuilder):
    """Builds the LIMIT clause with bound ``l_start`` / ``l_offset`` values.

    ``5`` and ``(0, 5)`` are equivalent: a single count implies offset 0.
    Both numbers are coerced to ``int``.  An empty sequence adds no clause.
    """

    keyword = "LIMIT"

    def __init__(self, ctx: BuildContext, binds: BindContext) -> None:
        super().__init__(ctx)
        self._binds = binds

    def build(self, limit: int | Sequence[int]) -> str:
        if not isinstance(limit, int) and not limit:
            return ""
        start, count = self._normalize(limit)
        dialect = self._ctx.dialect
        start_name = self._binds.add_value("l_start", start)
        count_name = self._binds.add_value("l_offset", count)
        return dialect.limit_clause(dialect.placeholder(start_name), dialect.placeholder(count_name))

    @staticmethod
    def _normalize(limit: int | Sequence[int]) -> tuple[int, int]:
        if isinstance(limit, int):
            return 0, limit
        if len(limit) == 1:
            return 0, int(limit[0])
        if len(limit) == 2:
            return int(limit[0]), int(limit[1])
        raise OptionShapeError(
            f"Limit needs a count or an (offset, count) pair, got {limit!r}.",
            option="limit",
        )
