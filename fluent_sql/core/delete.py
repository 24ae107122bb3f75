"""Fluent `DELETE` statement builder."""

from __future__ import annotations

from typing import Any, List, Optional

from .clauses import BooleanCondition, Connector, render_conditions
from .parameters import ParamNameGenerator
from .statement import UNSET, Statement


class DeleteBuilder(Statement):
    """Builds `DELETE FROM <table> [WHERE ...]`.

    Without a condition the statement deletes every row; no guard is applied.
    """

    def __init__(
        self, table: str, *, name_generator: Optional[ParamNameGenerator] = None
    ) -> None:
        super().__init__(name_generator=name_generator)
        self.table = table
        self._where: List[BooleanCondition] = []

    @classmethod
    def delete_from(cls, table: str) -> DeleteBuilder:
        return cls(table)

    def where(self, expression: str, value: Any = UNSET) -> DeleteBuilder:
        self._add_condition(self._where, expression, Connector.AND, value)
        return self

    def and_(self, expression: str, value: Any = UNSET) -> DeleteBuilder:
        return self.where(expression, value)

    def or_(self, expression: str, value: Any = UNSET) -> DeleteBuilder:
        self._add_condition(self._where, expression, Connector.OR, value)
        return self

    def render(self) -> str:
        sql = f"DELETE FROM {self.table}"
        if self._where:
            sql += f" WHERE {render_conditions(self._where)}"
        return sql
