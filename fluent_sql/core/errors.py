"""Exceptions raised by statement builders."""

from __future__ import annotations


class FluentSqlError(Exception):
    """Base class for all builder errors."""


class StatementStateError(FluentSqlError, RuntimeError):
    """Raised when a statement cannot be rendered from its current state."""


class ArgumentCountError(FluentSqlError, ValueError):
    """Raised when positional row values do not match the declared columns."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Number of values must match number of columns: "
            f"expected {expected}, got {actual}."
        )
