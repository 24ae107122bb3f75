"""Public core API for building parameterized SQL statements."""

from .clauses import (
    BooleanCondition,
    Connector,
    JoinClause,
    JoinKind,
    OrderDirection,
    OrderTerm,
    SelectField,
    render_conditions,
)
from .contracts import StatementPort
from .delete import DeleteBuilder
from .errors import ArgumentCountError, FluentSqlError, StatementStateError
from .factory import Sql
from .insert import InsertBuilder, row_param_name
from .parameters import ParameterRegistry, ParamNameGenerator, extract_param_name
from .select import SelectBuilder
from .statement import CompiledStatement, Statement
from .update import UpdateBuilder

__all__ = [
    "Sql",
    "Statement",
    "CompiledStatement",
    "SelectBuilder",
    "UpdateBuilder",
    "DeleteBuilder",
    "InsertBuilder",
    "SelectField",
    "JoinClause",
    "JoinKind",
    "BooleanCondition",
    "Connector",
    "OrderTerm",
    "OrderDirection",
    "ParameterRegistry",
    "ParamNameGenerator",
    "StatementPort",
    "FluentSqlError",
    "StatementStateError",
    "ArgumentCountError",
    "extract_param_name",
    "render_conditions",
    "row_param_name",
]
