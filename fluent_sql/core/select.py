"""Fluent `SELECT` statement builder.

Clauses are accumulated in any order and always rendered in SQL clause
order:

    SELECT [DISTINCT] fields FROM source joins WHERE ... GROUP BY ...
    HAVING ... ORDER BY ... LIMIT n OFFSET n

Optional clauses are omitted when empty. Other statements can be embedded as
subqueries in the select list, the `FROM` clause, a join, or an
`EXISTS`/`IN` predicate; their parameters are merged into this builder at
the time of the call.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union

from .clauses import (
    BooleanCondition,
    Connector,
    JoinClause,
    JoinKind,
    JoinKindInput,
    OrderDirection,
    OrderDirectionInput,
    OrderTerm,
    SelectField,
    normalize_direction,
    normalize_join_kind,
    render_conditions,
)
from .contracts import StatementPort
from .parameters import ParamNameGenerator
from .statement import UNSET, Statement

FieldInput = Union[str, Tuple[str, Optional[str]]]


class SelectBuilder(Statement):
    """Accumulates `SELECT` clauses and renders them to one SQL string."""

    def __init__(self, *, name_generator: Optional[ParamNameGenerator] = None) -> None:
        super().__init__(name_generator=name_generator)
        self._fields: List[SelectField] = []
        self._distinct = False
        self._from: Optional[str] = None
        self._from_alias: Optional[str] = None
        self._joins: List[JoinClause] = []
        self._where: List[BooleanCondition] = []
        self._group_by: List[str] = []
        self._having: List[BooleanCondition] = []
        self._order_by: List[OrderTerm] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None

    @classmethod
    def select(cls, *fields: FieldInput) -> SelectBuilder:
        """Start a `SELECT`; no fields renders `SELECT *`."""

        return cls().fields(*fields)

    @classmethod
    def select_distinct(cls, *fields: FieldInput) -> SelectBuilder:
        return cls.select(*fields).distinct()

    # Select list

    def field(self, expression: str, alias: Optional[str] = None) -> SelectBuilder:
        self._fields.append(SelectField(expression, alias))
        return self

    def fields(self, *items: FieldInput) -> SelectBuilder:
        """Append fields given as plain expressions or `(expression, alias)` pairs."""

        for item in items:
            if isinstance(item, tuple):
                expression, alias = item
                self._fields.append(SelectField(expression, alias))
            else:
                self._fields.append(SelectField(item))
        return self

    def distinct(self) -> SelectBuilder:
        self._distinct = True
        return self

    def sub_select(self, alias: str, subquery: StatementPort) -> SelectBuilder:
        """Append `(subquery) AS alias` to the select list."""

        self._fields.append(SelectField(self._embed(subquery), alias))
        return self

    # Row source

    def from_(self, table: str, alias: Optional[str] = None) -> SelectBuilder:
        """Set the row source, replacing any previous one."""

        self._from = table
        self._from_alias = alias
        return self

    def from_subquery(
        self, subquery: StatementPort, alias: Optional[str] = None
    ) -> SelectBuilder:
        self._from = self._embed(subquery)
        self._from_alias = alias
        return self

    # Joins

    def join(
        self,
        table: str,
        on: str,
        alias: Optional[str] = None,
        *,
        kind: JoinKindInput = JoinKind.INNER,
    ) -> SelectBuilder:
        self._joins.append(JoinClause(normalize_join_kind(kind), table, on, alias))
        return self

    def inner_join(self, table: str, on: str, alias: Optional[str] = None) -> SelectBuilder:
        return self.join(table, on, alias, kind=JoinKind.INNER)

    def left_join(self, table: str, on: str, alias: Optional[str] = None) -> SelectBuilder:
        return self.join(table, on, alias, kind=JoinKind.LEFT)

    def right_join(self, table: str, on: str, alias: Optional[str] = None) -> SelectBuilder:
        return self.join(table, on, alias, kind=JoinKind.RIGHT)

    def full_join(self, table: str, on: str, alias: Optional[str] = None) -> SelectBuilder:
        return self.join(table, on, alias, kind=JoinKind.FULL)

    def join_subquery(
        self,
        subquery: StatementPort,
        alias: Optional[str],
        on: str,
        *,
        kind: JoinKindInput = JoinKind.INNER,
    ) -> SelectBuilder:
        """Join against `(subquery) alias` and absorb its parameters."""

        join_kind = normalize_join_kind(kind)
        self._joins.append(JoinClause(join_kind, self._embed(subquery), on, alias))
        return self

    def left_join_subquery(
        self, subquery: StatementPort, alias: Optional[str], on: str
    ) -> SelectBuilder:
        return self.join_subquery(subquery, alias, on, kind=JoinKind.LEFT)

    def right_join_subquery(
        self, subquery: StatementPort, alias: Optional[str], on: str
    ) -> SelectBuilder:
        return self.join_subquery(subquery, alias, on, kind=JoinKind.RIGHT)

    def full_join_subquery(
        self, subquery: StatementPort, alias: Optional[str], on: str
    ) -> SelectBuilder:
        return self.join_subquery(subquery, alias, on, kind=JoinKind.FULL)

    # WHERE

    def where(self, expression: str, value: Any = UNSET) -> SelectBuilder:
        """Add an `AND`-connected condition.

        Args:
            expression: Raw boolean SQL expression.
            value: Optional value bound under the first `:name` token of
                `expression`. Without a token a counter-based name is used
                and a warning is logged.
        """

        self._add_condition(self._where, expression, Connector.AND, value)
        return self

    def and_(self, expression: str, value: Any = UNSET) -> SelectBuilder:
        return self.where(expression, value)

    def or_(self, expression: str, value: Any = UNSET) -> SelectBuilder:
        self._add_condition(self._where, expression, Connector.OR, value)
        return self

    def where_exists(self, subquery: StatementPort) -> SelectBuilder:
        return self._where_subquery("EXISTS ", subquery)

    def where_not_exists(self, subquery: StatementPort) -> SelectBuilder:
        return self._where_subquery("NOT EXISTS ", subquery)

    def where_in(self, field: str, subquery: StatementPort) -> SelectBuilder:
        return self._where_subquery(f"{field} IN ", subquery)

    def where_not_in(self, field: str, subquery: StatementPort) -> SelectBuilder:
        return self._where_subquery(f"{field} NOT IN ", subquery)

    def _where_subquery(self, prefix: str, subquery: StatementPort) -> SelectBuilder:
        self._add_condition(self._where, prefix + self._embed(subquery), Connector.AND)
        return self

    # GROUP BY / HAVING

    def group_by(self, *fields: str) -> SelectBuilder:
        self._group_by.extend(fields)
        return self

    def having(self, expression: str, value: Any = UNSET) -> SelectBuilder:
        self._add_condition(self._having, expression, Connector.AND, value)
        return self

    def having_and(self, expression: str, value: Any = UNSET) -> SelectBuilder:
        return self.having(expression, value)

    def having_or(self, expression: str, value: Any = UNSET) -> SelectBuilder:
        self._add_condition(self._having, expression, Connector.OR, value)
        return self

    # ORDER BY / LIMIT / OFFSET

    def order_by(
        self, field: str, direction: OrderDirectionInput = OrderDirection.ASC
    ) -> SelectBuilder:
        self._order_by.append(OrderTerm(field, normalize_direction(direction)))
        return self

    def order_by_asc(self, field: str) -> SelectBuilder:
        return self.order_by(field, OrderDirection.ASC)

    def order_by_desc(self, field: str) -> SelectBuilder:
        return self.order_by(field, OrderDirection.DESC)

    def limit(self, limit: int, offset: Optional[int] = None) -> SelectBuilder:
        """Set the row limit, and the offset when one is given."""

        self._limit = _non_negative("limit", limit)
        if offset is not None:
            self._offset = _non_negative("offset", offset)
        return self

    def offset(self, offset: int) -> SelectBuilder:
        self._offset = _non_negative("offset", offset)
        return self

    def render(self) -> str:
        parts = ["SELECT"]
        if self._distinct:
            parts.append("DISTINCT")
        parts.append(", ".join(f.to_sql() for f in self._fields) if self._fields else "*")

        if self._from is not None:
            parts.append(f"FROM {self._from}")
            if self._from_alias is not None:
                parts.append(self._from_alias)

        parts.extend(join.to_sql() for join in self._joins)

        if self._where:
            parts.append(f"WHERE {render_conditions(self._where)}")
        if self._group_by:
            parts.append(f"GROUP BY {', '.join(self._group_by)}")
        if self._having:
            parts.append(f"HAVING {render_conditions(self._having)}")
        if self._order_by:
            parts.append(f"ORDER BY {', '.join(t.to_sql() for t in self._order_by)}")
        if self._limit is not None:
            parts.append(f"LIMIT {self._limit}")
        if self._offset is not None:
            parts.append(f"OFFSET {self._offset}")

        return " ".join(parts)


def _non_negative(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer.")
    if value < 0:
        raise ValueError(f"{name} must be >= 0.")
    return value
