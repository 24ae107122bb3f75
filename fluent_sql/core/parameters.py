"""Parameter registry and named-placeholder helpers.

Every builder owns one `ParameterRegistry`. Nested builders hand their
entries to the outer builder through `merge`, so the outer statement ends up
with one flat mapping covering every placeholder in its rendered text.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator, Mapping, Optional

from .types import NamedParams

logger = logging.getLogger(__name__)

# A lone `:` followed by word characters; `::` casts are not placeholders.
_PLACEHOLDER_RE = re.compile(r"(?<!:):(?!:)(\w+)")


def extract_param_name(expression: str) -> Optional[str]:
    """Return the first named placeholder in `expression`.

    Examples:
        >>> extract_param_name("status = :status")
        'status'
        >>> extract_param_name("created_at::date >= :since")
        'since'
        >>> extract_param_name("deleted_at IS NULL") is None
        True
    """

    match = _PLACEHOLDER_RE.search(expression)
    if match is None:
        return None
    return match.group(1)


class ParamNameGenerator:
    """Generates fallback parameter names for expressions without a token.

    Names come from a counter owned by one builder, so they are repeatable
    for the same sequence of calls.
    """

    def __init__(self, prefix: str = "param") -> None:
        self.prefix = prefix
        self._counter = 0

    def next(self) -> str:
        """Return the next name in the sequence (`param_1`, `param_2`, ...)."""

        self._counter += 1
        return f"{self.prefix}_{self._counter}"


def resolve_param_name(expression: str, generator: ParamNameGenerator) -> str:
    """Derive the parameter name for a value bundled with `expression`."""

    name = extract_param_name(expression)
    if name is not None:
        return name

    name = generator.next()
    logger.warning(
        "No named placeholder in %r; binding value as %r. "
        "Add an explicit :name token to the expression.",
        expression,
        name,
    )
    return name


class ParameterRegistry:
    """Mapping from parameter name to bound value.

    Setting an existing name replaces the previous value. No error is raised
    for duplicates, including duplicates introduced by `merge`.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: NamedParams = {}
        if values:
            self._values.update(values)

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def update(self, values: Mapping[str, Any]) -> None:
        self._values.update(values)

    def merge(self, other: "ParameterRegistry | Mapping[str, Any]") -> None:
        """Absorb another registry's entries (last write wins)."""

        if isinstance(other, ParameterRegistry):
            self._values.update(other._values)
        else:
            self._values.update(other)

    def as_dict(self) -> NamedParams:
        """Return a copy safe for callers to mutate."""

        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParameterRegistry({self._values!r})"
