"""Clause value objects shared by all statement builders.

Each value object is immutable and renders itself to one SQL fragment. The
builders only decide which fragments to emit and in which order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class JoinKind(str, Enum):
    """Supported join kinds and their SQL keyword phrase."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"

    @property
    def keyword(self) -> str:
        if self is JoinKind.FULL:
            return "FULL OUTER JOIN"
        return f"{self.value} JOIN"


class Connector(str, Enum):
    """Logical connector placed before a condition."""

    AND = "AND"
    OR = "OR"


class OrderDirection(str, Enum):
    """Sort direction of one `ORDER BY` term."""

    ASC = "ASC"
    DESC = "DESC"


JoinKindInput = str | JoinKind
OrderDirectionInput = str | OrderDirection


def normalize_join_kind(kind: JoinKindInput) -> JoinKind:
    """Normalize user join kind input into a `JoinKind` value."""

    return _normalize(JoinKind, kind, "join kind")


def normalize_direction(direction: OrderDirectionInput) -> OrderDirection:
    """Normalize user direction input into an `OrderDirection` value."""

    return _normalize(OrderDirection, direction, "order direction")


def _normalize(enum_type, value, label: str):
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in enum_type._value2member_map_:
            return enum_type(key)
        allowed = sorted(enum_type._value2member_map_.keys())
        raise ValueError(f"Unsupported {label}: {value}. Supported: {allowed}")
    raise ValueError(f"Unsupported {label} type: {type(value).__name__}")


@dataclass(frozen=True)
class SelectField:
    """One entry of the select list.

    Attributes:
        expression: Column name, SQL expression, or parenthesized subquery.
        alias: Optional output name rendered with `AS`.
    """

    expression: str
    alias: Optional[str] = None

    def to_sql(self) -> str:
        if self.alias is not None:
            return f"{self.expression} AS {self.alias}"
        return self.expression


@dataclass(frozen=True)
class JoinClause:
    """One join against a table or a parenthesized subquery."""

    kind: JoinKind
    source: str
    condition: str
    alias: Optional[str] = None

    def to_sql(self) -> str:
        source = f"{self.source} {self.alias}" if self.alias is not None else self.source
        return f"{self.kind.keyword} {source} ON {self.condition}"


@dataclass(frozen=True)
class BooleanCondition:
    """One `WHERE`/`HAVING` entry.

    The connector is only emitted when the condition is not the first one in
    its list. Conditions are never parenthesized, so a list that mixes `AND`
    and `OR` follows the database's native operator precedence.
    """

    expression: str
    connector: Connector = Connector.AND


@dataclass(frozen=True)
class OrderTerm:
    """One `ORDER BY` term."""

    expression: str
    direction: OrderDirection = OrderDirection.ASC

    def to_sql(self) -> str:
        return f"{self.expression} {self.direction.value}"


def render_conditions(conditions: Sequence[BooleanCondition]) -> str:
    """Join conditions left to right with their own connectors.

    Args:
        conditions: Ordered conditions of one clause.

    Returns:
        Condition text without the clause keyword, or an empty string.
    """

    parts = []
    for index, condition in enumerate(conditions):
        if index > 0:
            parts.append(condition.connector.value)
        parts.append(condition.expression)
    return " ".join(parts)
