"""Shared core type aliases used across builders, contracts, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

NamedParams = Dict[str, Any]

RowMapping = Mapping[str, Any]
Rows = List[RowMapping]
MaybeRow = Optional[RowMapping]
