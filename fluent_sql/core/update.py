"""Fluent `UPDATE` statement builder."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .clauses import BooleanCondition, Connector, render_conditions
from .parameters import ParamNameGenerator
from .statement import UNSET, Statement
from .types import NamedParams


class UpdateBuilder(Statement):
    """Builds `UPDATE <table> SET col = :col, ... [WHERE ...]`.

    Every assignment renders a placeholder named after its column. Set values
    live apart from the bound parameters and are merged in by `parameters()`,
    so a `WHERE` token that reuses a column name is overwritten by the set
    value.
    """

    def __init__(
        self, table: str, *, name_generator: Optional[ParamNameGenerator] = None
    ) -> None:
        super().__init__(name_generator=name_generator)
        self.table = table
        self._assignments: Dict[str, Any] = {}
        self._where: List[BooleanCondition] = []

    @classmethod
    def update(cls, table: str) -> UpdateBuilder:
        return cls(table)

    def set(self, column: str, value: Any) -> UpdateBuilder:
        """Assign `value` to `column`; a repeated column keeps its position."""

        self._assignments[column] = value
        return self

    def set_many(self, values: Mapping[str, Any]) -> UpdateBuilder:
        self._assignments.update(values)
        return self

    def where(self, expression: str, value: Any = UNSET) -> UpdateBuilder:
        self._add_condition(self._where, expression, Connector.AND, value)
        return self

    def and_(self, expression: str, value: Any = UNSET) -> UpdateBuilder:
        return self.where(expression, value)

    def or_(self, expression: str, value: Any = UNSET) -> UpdateBuilder:
        self._add_condition(self._where, expression, Connector.OR, value)
        return self

    def parameters(self) -> NamedParams:
        """Return bound parameters with the set values written over them."""

        merged = self._params.as_dict()
        merged.update(self._assignments)
        return merged

    def render(self) -> str:
        assignments = ", ".join(f"{col} = :{col}" for col in self._assignments)
        sql = f"UPDATE {self.table} SET {assignments}"
        if self._where:
            sql += f" WHERE {render_conditions(self._where)}"
        return sql
