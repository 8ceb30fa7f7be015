"""Parameterized Postgres rendering of criteria predicates.

`SqlQuery` is a `QueryEngine` over an allowlisted `EntityGraph`. Identifiers come only from the
graph; every value becomes a bound `%s` parameter.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from src.sql.errors import SQLBuilderError
from src.sql.schema import Entity, EntityGraph, Relationship


@dataclass(frozen=True)
class BuiltQuery:
    """A parameterized SQL query ready for execution."""

    sql: str
    params: tuple[Any, ...]


@dataclass(frozen=True)
class TableRef:
    entity: Entity
    alias: str


@dataclass(frozen=True)
class ColumnRef:
    sql: str


@dataclass(frozen=True)
class SqlExpr:
    sql: str
    params: tuple[Any, ...] = ()


TRUE = SqlExpr("TRUE")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _combine(operator: str, expressions: Sequence[SqlExpr]) -> SqlExpr:
    if not expressions:
        raise SQLBuilderError(f"{operator} requires at least one expression")
    if len(expressions) == 1:
        return expressions[0]

    sql = "(" + f" {operator} ".join(e.sql for e in expressions) + ")"
    params: list[Any] = []
    for e in expressions:
        params.extend(e.params)
    return SqlExpr(sql, tuple(params))


class SqlQuery:
    """A SELECT over one root entity, built up by the criteria builder."""

    def __init__(self, graph: EntityGraph, entity: str) -> None:
        self._graph = graph
        self._root = TableRef(graph.entity(entity), "t0")
        self._joins: list[str] = []
        self._fetched: dict[str, TableRef] = {}
        self._distinct = False
        self._alias_seq = 0

    @property
    def root(self) -> TableRef:
        return self._root

    @property
    def joins(self) -> tuple[str, ...]:
        return tuple(self._joins)

    @property
    def is_distinct(self) -> bool:
        return self._distinct

    def _left_join(self, parent: TableRef, rel: Relationship, prefix: str) -> TableRef:
        self._alias_seq += 1
        ref = TableRef(self._graph.entity(rel.target), f"{prefix}{self._alias_seq}")
        self._joins.append(
            f"LEFT JOIN {ref.entity.table} {ref.alias}"
            f" ON {ref.alias}.{rel.remote_column} = {parent.alias}.{rel.local_column}"
        )
        return ref

    def join(self, parent: TableRef, name: str) -> TableRef:
        return self._left_join(parent, parent.entity.relationship(name), "t")

    def get(self, parent: TableRef, name: str) -> ColumnRef:
        return ColumnRef(f"{parent.alias}.{parent.entity.column(name)}")

    def fetch(self, name: str) -> None:
        if name in self._fetched:
            raise SQLBuilderError(f"Relationship already fetched: {name}")
        rel = self._root.entity.relationship(name)
        if rel.to_many:
            # Fetched columns are selected, so DISTINCT cannot collapse one row per child.
            raise SQLBuilderError(f"Cannot eagerly fetch to-many relationship: {name}")
        self._fetched[name] = self._left_join(self._root, rel, "f")

    def distinct(self) -> None:
        self._distinct = True

    def equal(self, attribute: ColumnRef, value: Any) -> SqlExpr:
        return SqlExpr(f"{attribute.sql} = %s", (value,))

    def contains(self, attribute: ColumnRef, needle: str) -> SqlExpr:
        return SqlExpr(
            f"LOWER(CAST({attribute.sql} AS TEXT)) LIKE %s ESCAPE '\\'",
            (f"%{_escape_like(needle)}%",),
        )

    def between(self, attribute: ColumnRef, lower: Any, upper: Any) -> SqlExpr:
        return SqlExpr(f"{attribute.sql} BETWEEN %s AND %s", (lower, upper))

    def greater_or_equal(self, attribute: ColumnRef, value: Any) -> SqlExpr:
        return SqlExpr(f"{attribute.sql} >= %s", (value,))

    def less_or_equal(self, attribute: ColumnRef, value: Any) -> SqlExpr:
        return SqlExpr(f"{attribute.sql} <= %s", (value,))

    def in_(self, attribute: ColumnRef, values: Sequence[Any]) -> SqlExpr:
        if not values:
            raise SQLBuilderError("IN requires at least one value")
        placeholders = ", ".join("%s" for _ in values)
        return SqlExpr(f"{attribute.sql} IN ({placeholders})", tuple(values))

    def and_(self, *expressions: SqlExpr) -> SqlExpr:
        return _combine("AND", expressions)

    def or_(self, *expressions: SqlExpr) -> SqlExpr:
        return _combine("OR", expressions)

    def conjunction(self) -> SqlExpr:
        return TRUE

    def _select_list(self) -> str:
        columns = [f"{self._root.alias}.{c}" for c in self._root.entity.columns]
        for name, ref in self._fetched.items():
            columns.extend(f"{ref.alias}.{c} AS {name}__{c}" for c in ref.entity.columns)
        return ", ".join(columns)

    def render(self, where: SqlExpr) -> BuiltQuery:
        """Render the SELECT with `where` as its filter."""

        parts = [
            "SELECT DISTINCT" if self._distinct else "SELECT",
            self._select_list(),
            f"FROM {self._root.entity.table} {self._root.alias}",
            *self._joins,
        ]
        if where != TRUE:
            parts.append(f"WHERE {where.sql}")
        return BuiltQuery(sql=" ".join(parts), params=where.params)
