"""Allowlisted entity graph.

All table, column and relationship names referenced in generated SQL must come from an
`EntityGraph`; no user-provided identifier is ever interpolated into SQL.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.sql.errors import SQLBuilderError

_IDENTIFIER_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def _check_identifier(kind: str, value: str) -> str:
    if not _IDENTIFIER_RE.fullmatch(value):
        raise SQLBuilderError(f"Invalid {kind} identifier: {value!r}")
    return value


@dataclass(frozen=True)
class Relationship:
    """A navigable link `owner.local_column = target.remote_column`."""

    name: str
    target: str
    local_column: str
    remote_column: str
    to_many: bool = False

    def __post_init__(self) -> None:
        _check_identifier("relationship", self.name)
        _check_identifier("entity", self.target)
        _check_identifier("column", self.local_column)
        _check_identifier("column", self.remote_column)


@dataclass(frozen=True)
class Entity:
    name: str
    table: str
    columns: tuple[str, ...]
    relationships: dict[str, Relationship] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _check_identifier("entity", self.name)
        _check_identifier("table", self.table)
        for column in self.columns:
            _check_identifier("column", column)

    def column(self, name: str) -> str:
        if name not in self.columns:
            raise SQLBuilderError(f"Unknown attribute {self.name}.{name}")
        return name

    def relationship(self, name: str) -> Relationship:
        try:
            return self.relationships[name]
        except KeyError as exc:
            raise SQLBuilderError(f"Unknown relationship {self.name}.{name}") from exc


class EntityGraph:
    """Registry of entities; relationship targets are checked on construction."""

    def __init__(self, entities: Iterable[Entity]) -> None:
        self._entities: dict[str, Entity] = {}
        for entity in entities:
            if entity.name in self._entities:
                raise SQLBuilderError(f"Duplicate entity: {entity.name}")
            self._entities[entity.name] = entity

        for entity in self._entities.values():
            for rel in entity.relationships.values():
                target = self.entity(rel.target)
                entity.column(rel.local_column)
                target.column(rel.remote_column)

    def entity(self, name: str) -> Entity:
        try:
            return self._entities[name]
        except KeyError as exc:
            raise SQLBuilderError(f"Unknown entity: {name}") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._entities
