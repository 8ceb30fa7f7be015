"""Deterministic SQL builder.

The builder converts a search descriptor into a parameterized SQL query over an allowlisted entity
graph. Identifiers (tables, columns, relationships) come from the graph; only values become bound
parameters.
"""

from __future__ import annotations

from typing import Any

from src.criteria.builder import build
from src.sql.engine import BuiltQuery, SqlQuery
from src.sql.schema import EntityGraph


def build_query(
        descriptor: Any,
        graph: EntityGraph,
        entity: str,
        *,
        eager_fetch: bool = True,
) -> BuiltQuery:
    """Build a SELECT over `entity` filtered by `descriptor`."""

    query = SqlQuery(graph, entity)
    where = build(descriptor, query, eager_fetch=eager_fetch)
    return query.render(where)
