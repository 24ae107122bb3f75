"""Core port contracts used by builders and adapters."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import NamedParams


@runtime_checkable
class StatementPort(Protocol):
    """Anything that renders SQL text plus its bound parameters."""

    def render(self) -> str: ...

    def parameters(self) -> NamedParams: ...

