"""Dotted path resolution with per-build traversal de-duplication."""

from __future__ import annotations

from typing import Any

from src.criteria.engine import QueryEngine


class TraversalCache:
    """Traversal handles keyed by dotted relationship prefix (e.g. `"department.manager"`).

    A cache belongs to exactly one build; it must not be shared between queries.
    """

    def __init__(self) -> None:
        self._joins: dict[str, Any] = {}

    def get_or_join(self, engine: QueryEngine, parent: Any, prefix: str, name: str) -> Any:
        join = self._joins.get(prefix)
        if join is None:
            join = engine.join(parent, name)
            self._joins[prefix] = join
        return join

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._joins

    def __len__(self) -> int:
        return len(self._joins)


def resolve_path(engine: QueryEngine, path: str, cache: TraversalCache) -> Any:
    """Resolve `path` to an attribute reference, reusing cached traversals.

    Every segment but the last is a relationship traversed with left-outer semantics; the last is
    the attribute read at the final position.
    """

    *relationships, attribute = path.split(".")
    current = engine.root
    prefix = ""
    for name in relationships:
        prefix = f"{prefix}.{name}" if prefix else name
        current = cache.get_or_join(engine, current, prefix, name)
    return engine.get(current, attribute)
