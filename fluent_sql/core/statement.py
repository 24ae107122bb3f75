"""Shared state and helpers for all statement builders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, TypeVar

from .clauses import BooleanCondition, Connector
from .contracts import StatementPort
from .parameters import ParameterRegistry, ParamNameGenerator, resolve_param_name
from .types import NamedParams

# Marks "no value passed"; `None` is a legitimate bound value.
UNSET: Any = object()

_S = TypeVar("_S", bound="Statement")


@dataclass(frozen=True)
class CompiledStatement:
    """Rendered SQL text with the parameters its placeholders expect."""

    sql: str
    params: NamedParams = field(default_factory=dict)

    def render(self) -> str:
        return self.sql

    def parameters(self) -> NamedParams:
        return dict(self.params)


class Statement(ABC):
    """Base class owning the parameter registry of one statement.

    Subclasses accumulate their clauses through fluent methods that mutate
    the builder and return it. `render()` must be a pure function of the
    accumulated state.
    """

    def __init__(self, *, name_generator: Optional[ParamNameGenerator] = None) -> None:
        self._params = ParameterRegistry()
        self._names = name_generator or ParamNameGenerator()

    @abstractmethod
    def render(self) -> str:
        """Render the accumulated clauses to SQL text."""

    def parameters(self) -> NamedParams:
        """Return a copy of the bound parameters."""

        return self._params.as_dict()

    def param(self: _S, name: str, value: Any) -> _S:
        """Bind one named parameter, replacing any previous value."""

        self._params.set(name, value)
        return self

    def params(self: _S, values: Mapping[str, Any]) -> _S:
        """Bind many named parameters, replacing previous values."""

        self._params.update(values)
        return self

    def compile(self) -> CompiledStatement:
        """Return the rendered SQL and its parameters as one value."""

        return CompiledStatement(self.render(), self.parameters())

    def __str__(self) -> str:
        return self.render()

    def _add_condition(
        self,
        target: List[BooleanCondition],
        expression: str,
        connector: Connector,
        value: Any = UNSET,
    ) -> None:
        target.append(BooleanCondition(expression, connector))
        if value is not UNSET:
            self._params.set(resolve_param_name(expression, self._names), value)

    def _embed(self, subquery: StatementPort) -> str:
        """Render `subquery` in parentheses and absorb its parameters."""

        sql = f"({subquery.render()})"
        self._params.merge(subquery.parameters())
        return sql
