"""Criteria builder: descriptor instance -> engine predicate.

Building happens in two stages:
    1) `compile_criteria` turns a descriptor into an engine-independent `AllOf` tree plus the set
       of relationships worth fetching eagerly;
    2) `build` applies that result to one `QueryEngine`, sharing a single `TraversalCache` so every
       relationship prefix is joined once per query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from src.criteria.compiler import compile_field
from src.criteria.engine import QueryEngine
from src.criteria.hints import collect_fetch_hints
from src.criteria.metadata import get_field_intents
from src.criteria.predicates import (
    AllOf,
    AnyOf,
    Between,
    Contains,
    Equal,
    GreaterOrEqual,
    In,
    LessOrEqual,
    Predicate,
)
from src.criteria.resolver import TraversalCache, resolve_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledCriteria:
    """Engine-independent result of compiling one descriptor instance."""

    predicate: AllOf
    fetch_hints: frozenset[str]


def compile_criteria(descriptor: Any) -> CompiledCriteria:
    """Compile `descriptor` into a predicate tree, one conjunct per contributing field."""

    intents = get_field_intents(type(descriptor))
    fetch_hints = collect_fetch_hints(intents, descriptor)

    conjuncts: list[Predicate] = []
    for intent in intents:
        predicate = compile_field(intent, intent.read(descriptor))
        if predicate is not None:
            conjuncts.append(predicate)

    return CompiledCriteria(predicate=AllOf(operands=tuple(conjuncts)), fetch_hints=fetch_hints)


def _apply_fetch_hints(engine: QueryEngine, hints: frozenset[str]) -> bool:
    applied = False
    for name in sorted(hints):
        try:
            engine.fetch(name)
        except Exception as exc:  # noqa: BLE001
            # Eager loading only affects efficiency; filtering stays correct without it.
            logger.debug("fetch skipped relationship=%s reason=%s", name, exc)
            continue
        applied = True
    return applied


def _to_expression(node: Predicate, engine: QueryEngine, cache: TraversalCache) -> Any:
    if isinstance(node, AllOf):
        if node.is_empty:
            return engine.conjunction()
        return engine.and_(*(_to_expression(op, engine, cache) for op in node.operands))
    if isinstance(node, AnyOf):
        return engine.or_(*(_to_expression(op, engine, cache) for op in node.operands))

    attribute = resolve_path(engine, node.path, cache)
    if isinstance(node, Equal):
        return engine.equal(attribute, node.value)
    if isinstance(node, Contains):
        return engine.contains(attribute, node.needle)
    if isinstance(node, Between):
        return engine.between(attribute, node.lower, node.upper)
    if isinstance(node, GreaterOrEqual):
        return engine.greater_or_equal(attribute, node.value)
    if isinstance(node, LessOrEqual):
        return engine.less_or_equal(attribute, node.value)
    if isinstance(node, In):
        return engine.in_(attribute, node.values)
    raise TypeError(f"Unsupported predicate node: {type(node).__name__}")


def to_expression(criteria: CompiledCriteria, engine: QueryEngine) -> Any:
    """Translate compiled criteria into an engine expression using a fresh traversal cache."""

    return _to_expression(criteria.predicate, engine, TraversalCache())


def build(descriptor: Any, engine: QueryEngine, *, eager_fetch: bool = True) -> Any:
    """Build the engine predicate for `descriptor`.

    Fetch hints are applied before any filtering join; if at least one fetch succeeded the query
    is marked distinct. A descriptor without any contributing field yields
    `engine.conjunction()`.
    """

    criteria = compile_criteria(descriptor)

    if eager_fetch and _apply_fetch_hints(engine, criteria.fetch_hints):
        engine.distinct()

    return to_expression(criteria, engine)
