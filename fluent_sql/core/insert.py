"""Fluent `INSERT` statement builder with multi-row support."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import ArgumentCountError, StatementStateError
from .parameters import ParamNameGenerator
from .statement import Statement
from .types import NamedParams


def row_param_name(column: str, row_index: int) -> str:
    """Placeholder name of `column` in row `row_index` (0-based).

    The first row uses the bare column name; later rows get `_<index>` so
    names stay unique across the `VALUES` list.
    """

    if row_index == 0:
        return column
    return f"{column}_{row_index}"


class InsertBuilder(Statement):
    """Builds `INSERT INTO <table> (cols) VALUES (...), (...)`."""

    def __init__(
        self, table: str, *, name_generator: Optional[ParamNameGenerator] = None
    ) -> None:
        super().__init__(name_generator=name_generator)
        self.table = table
        self._columns: List[str] = []
        self._rows: List[Dict[str, Any]] = []

    @classmethod
    def insert_into(cls, table: str) -> InsertBuilder:
        return cls(table)

    def columns(self, *columns: str) -> InsertBuilder:
        self._columns.extend(columns)
        return self

    def values(self, *values: Any) -> InsertBuilder:
        """Add one row matched positionally to the declared columns.

        Raises:
            ArgumentCountError: If the value count differs from the column count.
        """

        if len(values) != len(self._columns):
            raise ArgumentCountError(len(self._columns), len(values))
        self._rows.append(dict(zip(self._columns, values)))
        return self

    def values_from(self, row: Mapping[str, Any]) -> InsertBuilder:
        """Add one row from a column mapping.

        The first mapping seeds the column list when no columns were declared.
        Keys outside the column list are ignored at render time; missing
        columns bind `None`.
        """

        if not self._columns:
            self._columns.extend(row.keys())
        self._rows.append(dict(row))
        return self

    def values_many(self, rows: Iterable[Mapping[str, Any]]) -> InsertBuilder:
        for row in rows:
            self.values_from(row)
        return self

    def parameters(self) -> NamedParams:
        merged = self._params.as_dict()
        for index, row in enumerate(self._rows):
            for column in self._columns:
                merged[row_param_name(column, index)] = row.get(column)
        return merged

    def render(self) -> str:
        if not self._columns or not self._rows:
            raise StatementStateError("Must specify columns and values.")

        value_clauses = []
        for index in range(len(self._rows)):
            placeholders = ", ".join(
                f":{row_param_name(column, index)}" for column in self._columns
            )
            value_clauses.append(f"({placeholders})")

        return (
            f"INSERT INTO {self.table} ({', '.join(self._columns)}) "
            f"VALUES {', '.join(value_clauses)}"
        )
