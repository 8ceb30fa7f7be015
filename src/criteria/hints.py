"""Eager-load hints derived from the paths a descriptor instance actually filters on."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from src.criteria.markers import Range
from src.criteria.metadata import FieldIntent, IntentKind

COLLECTION_TYPES = (list, tuple, set, frozenset)


def is_blank(value: Any) -> bool:
    """Return True for None and whitespace-only strings."""

    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def root_relationship(path: str) -> str | None:
    """Return the first segment of a multi-segment path (`"author.name"` -> `"author"`)."""

    head, sep, _ = path.partition(".")
    return head if sep else None


def filters_on(intent: FieldIntent, value: Any) -> bool:
    """Return True if `value` yields a predicate for `intent` (see `compile_field`)."""

    if is_blank(value):
        return False
    if intent.kind == IntentKind.multi_path_term:
        return isinstance(value, str)
    if intent.kind == IntentKind.range:
        return isinstance(value, Range) and (value.from_ is not None or value.to is not None)
    if isinstance(value, COLLECTION_TYPES):
        return bool(value)
    return True


def collect_fetch_hints(intents: Iterable[FieldIntent], descriptor: Any) -> frozenset[str]:
    """Collect root relationships of every path a field of `descriptor` filters on."""

    hints: set[str] = set()
    for intent in intents:
        if not filters_on(intent, intent.read(descriptor)):
            continue
        for path in intent.paths:
            root = root_relationship(path)
            if root is not None:
                hints.add(root)
    return frozenset(hints)
