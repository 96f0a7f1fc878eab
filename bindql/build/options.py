"""SELECT options model and composer.

Every option key is either *structured* (lists, mappings, numbers) or
*raw*: a trusted SQL fragment wrapped in :class:`Raw`.  Plain strings are
wrapped automatically, so both spellings work::

    SelectOptions(order={"created_at": "desc"})   # structured
    SelectOptions(order="created_at DESC")         # raw, same SQL

Raw fragments are inserted verbatim after the clause keyword.  Never build
them from untrusted input.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from bindql.build.clause_builders import (
    ClauseBuilder,
    FieldClauseBuilder,
    GroupClauseBuilder,
    JoinClauseBuilder,
    LimitClauseBuilder,
    OrderClauseBuilder,
    WhereClauseBuilder,
)
from bindql.build.context import BindContext, BuildContext
from bindql.build.predicate import PredicateBuilder
from bindql.errors import OptionShapeError


@dataclass(frozen=True)
class Raw:
    """A trusted SQL fragment used verbatim for one option clause."""

    sql: str


class SelectOptions(BaseModel):
    """Clause options for a SELECT statement.

    Attributes:
        field: Columns to project (``*`` when absent or empty).
        join: Joined table -> ``(left, [op,] right[, type])``.
        where: Condition sequences, see :mod:`bindql.build.predicate`.
        order: Column -> ``ASC`` / ``DESC``.
        group: Columns to group by.
        limit: A count, or an ``(offset, count)`` pair.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: list[str] | Raw | None = None
    join: dict[str, list[Any]] | Raw | None = None
    where: list[Any] | Raw | None = None
    order: dict[str, str | None] | Raw | None = None
    group: list[str] | Raw | None = None
    limit: int | list[int] | Raw | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _wrap_raw(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str):
            return value
        sql = value.strip()
        if not sql:
            return None
        if info.field_name == "limit" and sql.isdigit():
            return int(sql)
        return Raw(sql)

    @classmethod
    def coerce(cls, options: SelectOptions | Mapping[str, Any] | None) -> SelectOptions:
        """Return ``options`` as a :class:`SelectOptions` instance.

        Raises:
            OptionShapeError: If the mapping has unknown keys or values of
                the wrong type.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        try:
            return cls.model_validate(dict(options))
        except PydanticValidationError as exc:
            raise OptionShapeError(f"Invalid select options: {exc}") from exc


@dataclass
class ComposedOptions:
    """Rendered SELECT options.

    Attributes:
        field: The projection list.
        clauses: Clause fragments in statement order, without empty ones.
    """

    field: str
    clauses: list[str]


class OptionsComposer:
    """Renders :class:`SelectOptions` into ordered clause fragments.

    Bind values produced by the WHERE and LIMIT clauses land in the shared
    :class:`BindContext`.

    Args:
        ctx: Static build context.
        binds: Bind accumulator for the statement being built.
        predicate_builder: Builder used for structured WHERE options.
    """

    #: Clause order after ``FROM <table>``.
    CLAUSE_ORDER: tuple[str, ...] = ("join", "where", "group", "order", "limit")

    def __init__(
        self,
        ctx: BuildContext,
        binds: BindContext,
        predicate_builder: PredicateBuilder,
    ) -> None:
        self._field = FieldClauseBuilder(ctx)
        self._builders: dict[str, ClauseBuilder] = {
            "join": JoinClauseBuilder(ctx),
            "where": WhereClauseBuilder(ctx, predicate_builder),
            "group": GroupClauseBuilder(ctx),
            "order": OrderClauseBuilder(ctx),
            "limit": LimitClauseBuilder(ctx, binds),
        }

    def compose(self, options: SelectOptions) -> ComposedOptions:
        field_sql = self._dispatch(self._field, options.field) or "*"
        clauses: list[str] = []
        for key in self.CLAUSE_ORDER:
            fragment = self._dispatch(self._builders[key], getattr(options, key))
            if fragment:
                clauses.append(fragment)
        return ComposedOptions(field=field_sql, clauses=clauses)

    @staticmethod
    def _dispatch(builder: ClauseBuilder, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, Raw):
            return builder.build_raw(value.sql)
        return builder.build(value)
