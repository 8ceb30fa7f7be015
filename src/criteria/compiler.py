"""Per-field predicate compilation.

Elision rules:
    - null values and blank strings contribute nothing, whatever the intent;
    - an empty collection contributes nothing;
    - a range with one bound degrades to a one-sided comparison, with no bounds to nothing.
"""

from __future__ import annotations

import logging
from typing import Any

from src.criteria.hints import COLLECTION_TYPES, is_blank
from src.criteria.markers import Operation, Range
from src.criteria.metadata import FieldIntent, IntentKind
from src.criteria.predicates import (
    AnyOf,
    Between,
    Contains,
    Equal,
    GreaterOrEqual,
    In,
    LessOrEqual,
    Predicate,
)

logger = logging.getLogger(__name__)


def _match(path: str, operation: Operation, value: Any) -> Predicate:
    if operation == Operation.like:
        return Contains(path=path, needle=value.lower())
    return Equal(path=path, value=value)


def _compile_term(intent: FieldIntent, value: Any) -> Predicate | None:
    if not isinstance(value, str):
        logger.warning(
            "term field=%s expects text, got %s; field ignored",
            intent.name,
            type(value).__name__,
        )
        return None

    return AnyOf(operands=tuple(_match(path, intent.operation, value) for path in intent.paths))


def _compile_range(intent: FieldIntent, value: Any) -> Predicate | None:
    if not isinstance(value, Range):
        logger.warning(
            "range field=%s expects Range, got %s; field ignored",
            intent.name,
            type(value).__name__,
        )
        return None

    path = intent.paths[0]
    if value.from_ is not None and value.to is not None:
        return Between(path=path, lower=value.from_, upper=value.to)
    if value.from_ is not None:
        return GreaterOrEqual(path=path, value=value.from_)
    if value.to is not None:
        return LessOrEqual(path=path, value=value.to)
    return None


def _compile_single(intent: FieldIntent, value: Any) -> Predicate | None:
    path = intent.paths[0]

    if isinstance(value, COLLECTION_TYPES):
        if not value:
            return None
        return In(path=path, values=tuple(value))

    if intent.operation == Operation.like and not isinstance(value, str):
        logger.warning(
            "like on non-text field=%s type=%s; using equality",
            intent.name,
            type(value).__name__,
        )
        return Equal(path=path, value=value)

    return _match(path, intent.operation, value)


_COMPILERS = {
    IntentKind.multi_path_term: _compile_term,
    IntentKind.range: _compile_range,
    IntentKind.single_path: _compile_single,
}


def compile_field(intent: FieldIntent, value: Any) -> Predicate | None:
    """Compile one field's runtime value into a predicate, or None if it contributes nothing."""

    if is_blank(value):
        return None

    compiler = _COMPILERS.get(intent.kind)
    if compiler is None:
        return None
    return compiler(intent, value)
