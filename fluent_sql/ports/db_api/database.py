"""DB-API adapter that executes built statements.

The adapter only hands rendered SQL and its parameter mapping to a driver.
The driver must accept the named (`:name`) paramstyle, as `sqlite3` does.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Mapping, Tuple

from ...core.contracts import StatementPort
from ...core.types import MaybeRow, NamedParams, RowMapping, Rows

logger = logging.getLogger(__name__)


class Database:
    """Thin DB-API wrapper that normalizes execute and row mapping behavior."""

    def __init__(self, conn: Any):
        """Create database adapter.

        Args:
            conn: DB-API connection whose driver supports named parameters.
        """

        self._closed = False
        self.conn: Any | None = conn

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def _should_begin_transaction(self, conn: Any) -> bool:
        # sqlite3 in autocommit mode never opens a transaction on its own.
        if not hasattr(conn, "isolation_level"):
            return False
        if conn.isolation_level is not None:
            return False
        return not bool(getattr(conn, "in_transaction", False))

    @contextlib.contextmanager
    def transaction(self):
        """Provide commit/rollback transaction scope."""

        conn = self._require_open_connection()
        try:
            if self._should_begin_transaction(conn):
                conn.execute("BEGIN")
            yield
            conn.commit()
        except BaseException:
            conn.rollback()
            raise

    def execute(self, statement: Any, params: NamedParams | None = None) -> Any:
        """Execute a statement and return the cursor.

        Args:
            statement: A builder, a `CompiledStatement`, or raw SQL text.
            params: Parameters for raw SQL text. Must be omitted for builders.
        """

        sql, bound = self._resolve(statement, params)
        conn = self._require_open_connection()
        logger.debug("Executing %s with parameters %s", sql, sorted(bound))
        cur = conn.cursor()
        cur.execute(sql, bound)
        return cur

    def _resolve(
        self, statement: Any, params: NamedParams | None
    ) -> Tuple[str, NamedParams]:
        if isinstance(statement, str):
            return statement, dict(params or {})
        if isinstance(statement, StatementPort):
            if params is not None:
                raise TypeError("params are taken from the statement itself.")
            return statement.render(), statement.parameters()
        raise TypeError(f"Unsupported statement type: {type(statement).__name__}")

    def _row_to_mapping(self, cursor: Any, row: Any) -> RowMapping:
        """Normalize row object to mapping.

        Supports mapping rows, rows exposing `keys()` (such as `sqlite3.Row`),
        and tuple/list rows via `cursor.description`.
        """

        if isinstance(row, Mapping):
            return row

        if hasattr(row, "keys"):
            return {key: row[key] for key in row.keys()}

        if isinstance(row, (tuple, list)):
            desc = getattr(cursor, "description", None)
            if not desc:
                raise TypeError(
                    "Cursor has no description; cannot map tuple rows to dict."
                )
            cols = [d[0] for d in desc]
            return dict(zip(cols, row))

        raise TypeError(f"Unsupported row type: {type(row)}")

    def fetchone(self, statement: Any, params: NamedParams | None = None) -> MaybeRow:
        """Execute query and return one normalized row mapping."""

        cur = self.execute(statement, params)
        row = cur.fetchone()
        if row is None:
            return None
        return self._row_to_mapping(cur, row)

    def fetchall(self, statement: Any, params: NamedParams | None = None) -> Rows:
        """Execute query and return all rows as normalized mappings."""

        cur = self.execute(statement, params)
        rows = cur.fetchall()
        return [self._row_to_mapping(cur, r) for r in rows]

    def close(self) -> None:
        """Close the underlying connection; repeated calls are no-ops."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
