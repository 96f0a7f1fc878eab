"""Statement assembly for INSERT / UPDATE / SELECT / DELETE.

``StatementBuilder`` wires together the focused sub-builders and drives
statement assembly.  All dialect-specific behaviour is delegated to the
injected :class:`~bindql.build.base.SQLDialect`.

Sub-builder hierarchy
---------------------
StatementBuilder
  ├── DataBinder          (data_binder.py)
  ├── PredicateBuilder    (predicate.py)
  └── OptionsComposer     (options.py)
        └── Field / Join / Where / Group / Order / Limit builders
                          (clause_builders.py)

Bind context sharing
--------------------
A single :class:`~bindql.build.context.BindContext` is created per statement
and threaded through every sub-builder, so placeholder names are unique for
the whole statement (``d_`` data binds never collide with ``w_`` WHERE or
``l_`` LIMIT binds).

Clauses are collected into an ordered list of fragments and joined once,
so absent optional clauses never leave stray whitespace.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from bindql.build.base import CompiledStatement, SQLDialect
from bindql.build.context import BindContext, BuildContext
from bindql.build.data_binder import DataBinder
from bindql.build.options import OptionsComposer, SelectOptions
from bindql.build.predicate import Condition, PredicateBuilder
from bindql.errors import EmptyPayloadError, MissingPredicateError

logger = structlog.get_logger(__name__)

Conditions = Sequence[Condition | Sequence[Any]]


class StatementBuilder:
    """Builds parameterized statements without touching a database.

    Args:
        dialect: Dialect used for quoting, placeholders and LIMIT syntax.
    """

    def __init__(self, dialect: SQLDialect) -> None:
        self._ctx = BuildContext(dialect=dialect)

    @property
    def dialect(self) -> SQLDialect:
        return self._ctx.dialect

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, table: str, data: Mapping[str, Any]) -> CompiledStatement:
        """Build ``INSERT INTO <table> (<cols>) VALUES(<binds>)``.

        Raises:
            EmptyPayloadError: If ``data`` is empty.
        """
        if not data:
            logger.warning("statement_refused", operation="insert", table=table, reason="empty_payload")
            raise EmptyPayloadError("insert", table)
        binds = BindContext()
        sub = self._make_sub_builders(binds)
        parts = [
            "INSERT INTO",
            self._ctx.dialect.escape(table),
            sub["data"].columns_values(data),
        ]
        return self._finish("insert", table, parts, binds)

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        where: Conditions = (),
    ) -> CompiledStatement:
        """Build ``UPDATE <table> SET <col> = <bind>, ... [WHERE ...]``.

        An empty ``where`` updates every row; it is allowed but logged.

        Raises:
            EmptyPayloadError: If ``data`` is empty.
        """
        if not data:
            logger.warning("statement_refused", operation="update", table=table, reason="empty_payload")
            raise EmptyPayloadError("update", table)
        binds = BindContext()
        sub = self._make_sub_builders(binds)
        parts = [
            "UPDATE",
            self._ctx.dialect.escape(table),
            "SET",
            sub["data"].assignments(data),
        ]
        where_sql = sub["pred"].build_clause(where)
        if where_sql:
            parts.append(where_sql)
        else:
            logger.warning("update_without_where", table=table)
        return self._finish("update", table, parts, binds)

    def select(
        self,
        table: str,
        options: SelectOptions | Mapping[str, Any] | None = None,
    ) -> CompiledStatement:
        """Build ``SELECT <field> FROM <table> [clauses...]``.

        Raises:
            OptionShapeError: If ``options`` is malformed.
        """
        opts = SelectOptions.coerce(options)
        binds = BindContext()
        sub = self._make_sub_builders(binds)
        composed = sub["options"].compose(opts)
        parts = [
            "SELECT",
            composed.field,
            "FROM",
            self._ctx.dialect.escape(table),
            *composed.clauses,
        ]
        return self._finish("select", table, parts, binds)

    def delete(self, table: str, where: Conditions) -> CompiledStatement:
        """Build ``DELETE FROM <table> WHERE ...``.

        Raises:
            MissingPredicateError: If ``where`` is empty.
        """
        if not where:
            logger.warning("statement_refused", operation="delete", table=table, reason="missing_predicate")
            raise MissingPredicateError(table)
        binds = BindContext()
        sub = self._make_sub_builders(binds)
        parts = [
            "DELETE FROM",
            self._ctx.dialect.escape(table),
            sub["pred"].build_clause(where),
        ]
        return self._finish("delete", table, parts, binds)

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _finish(
        self,
        operation: str,
        table: str,
        parts: list[str],
        binds: BindContext,
    ) -> CompiledStatement:
        sql = " ".join(parts)
        logger.debug("statement_built", operation=operation, table=table, binds=sorted(binds.params))
        return CompiledStatement(
            sql=sql,
            params=binds.params,
            dialect=self._ctx.dialect.dialect_name,
        )

    def _make_sub_builders(self, binds: BindContext) -> dict:
        """Construct the sub-builder graph for one statement."""
        pred_builder = PredicateBuilder(self._ctx, binds)
        return {
            "data": DataBinder(self._ctx, binds),
            "pred": pred_builder,
            "options": OptionsComposer(self._ctx, binds, pred_builder),
        }
