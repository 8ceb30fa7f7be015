"""Query-engine capability consumed by the criteria builder.

An engine instance represents one query under construction. Handles and expressions are opaque to
the builder; it only passes them back into the engine.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol


class QueryEngine(Protocol):
    @property
    def root(self) -> Any:
        """Traversal position of the queried entity."""

    def join(self, parent: Any, name: str) -> Any:
        """Return a new left-outer traversal of relationship `name` from `parent`."""

    def get(self, parent: Any, name: str) -> Any:
        """Return a reference to attribute `name` at `parent`."""

    def fetch(self, name: str) -> None:
        """Eagerly load relationship `name` of the root entity."""

    def distinct(self) -> None:
        """Mark the result set as de-duplicated."""

    def equal(self, attribute: Any, value: Any) -> Any: ...

    def contains(self, attribute: Any, needle: str) -> Any:
        """Case-insensitive substring match of an already lower-cased `needle`."""

    def between(self, attribute: Any, lower: Any, upper: Any) -> Any: ...

    def greater_or_equal(self, attribute: Any, value: Any) -> Any: ...

    def less_or_equal(self, attribute: Any, value: Any) -> Any: ...

    def in_(self, attribute: Any, values: Sequence[Any]) -> Any: ...

    def and_(self, *expressions: Any) -> Any: ...

    def or_(self, *expressions: Any) -> Any: ...

    def conjunction(self) -> Any:
        """Expression that is always true."""
