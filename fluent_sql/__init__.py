"""Fluent builders for parameterized SELECT, UPDATE, DELETE and INSERT SQL."""

import logging

from .core import (
    ArgumentCountError,
    CompiledStatement,
    Connector,
    DeleteBuilder,
    FluentSqlError,
    InsertBuilder,
    JoinKind,
    OrderDirection,
    ParameterRegistry,
    ParamNameGenerator,
    SelectBuilder,
    Sql,
    StatementStateError,
    UpdateBuilder,
    extract_param_name,
)
from .ports import Database

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Sql",
    "SelectBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    "InsertBuilder",
    "CompiledStatement",
    "Connector",
    "JoinKind",
    "OrderDirection",
    "ParameterRegistry",
    "ParamNameGenerator",
    "FluentSqlError",
    "StatementStateError",
    "ArgumentCountError",
    "Database",
    "extract_param_name",
]
