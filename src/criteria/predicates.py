"""Engine-independent predicate tree.

The compiler produces these nodes; the builder translates them into engine expressions. Leaves
reference their target by dotted path and hold bound values only.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Equal:
    path: str
    value: Any


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match; `needle` is already lower-cased."""

    path: str
    needle: str


@dataclass(frozen=True)
class Between:
    """Inclusive on both bounds."""

    path: str
    lower: Any
    upper: Any


@dataclass(frozen=True)
class GreaterOrEqual:
    path: str
    value: Any


@dataclass(frozen=True)
class LessOrEqual:
    path: str
    value: Any


@dataclass(frozen=True)
class In:
    path: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class AnyOf:
    operands: tuple[Predicate, ...]


@dataclass(frozen=True)
class AllOf:
    """Conjunction; an empty `AllOf` matches everything."""

    operands: tuple[Predicate, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.operands


Leaf: TypeAlias = Equal | Contains | Between | GreaterOrEqual | LessOrEqual | In
Predicate: TypeAlias = Leaf | AnyOf | AllOf


def iter_paths(node: Predicate) -> Iterator[str]:
    """Yield the path of every leaf under `node`, depth-first, left to right."""

    if isinstance(node, (AnyOf, AllOf)):
        for operand in node.operands:
            yield from iter_paths(operand)
    else:
        yield node.path
