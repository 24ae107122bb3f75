"""Entry points for starting statements."""

from __future__ import annotations

from .delete import DeleteBuilder
from .insert import InsertBuilder
from .select import FieldInput, SelectBuilder
from .update import UpdateBuilder


class Sql:
    """Fluent statement factory methods."""

    @staticmethod
    def select(*fields: FieldInput) -> SelectBuilder:
        """Start `SELECT fields`; no fields renders `SELECT *`."""

        return SelectBuilder.select(*fields)

    @staticmethod
    def select_distinct(*fields: FieldInput) -> SelectBuilder:
        """Start `SELECT DISTINCT fields`."""

        return SelectBuilder.select_distinct(*fields)

    @staticmethod
    def update(table: str) -> UpdateBuilder:
        """Start `UPDATE table`."""

        return UpdateBuilder(table)

    @staticmethod
    def delete_from(table: str) -> DeleteBuilder:
        """Start `DELETE FROM table`."""

        return DeleteBuilder(table)

    @staticmethod
    def insert_into(table: str) -> InsertBuilder:
        """Start `INSERT INTO table`."""

        return InsertBuilder(table)
