"""Pytest configuration.

The repository uses a flat `src/` layout. This conftest ensures tests can import from the `src.*`
namespace when running `pytest` locally, and provides a recording query engine for builder tests.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.criteria import metadata  # noqa: E402


@dataclass(frozen=True)
class Position:
    """Traversal handle of the recording engine; `path` is `""` for the root."""

    path: str
    serial: int


class RecordingEngine:
    """`QueryEngine` that builds plain tuples and records every traversal it creates."""

    def __init__(self, *, failing_fetches: Sequence[str] = ()) -> None:
        self.root = Position(path="", serial=0)
        self.joins: list[str] = []
        self.fetches: list[str] = []
        self.is_distinct = False
        self._failing_fetches = set(failing_fetches)

    def join(self, parent: Position, name: str) -> Position:
        path = f"{parent.path}.{name}" if parent.path else name
        self.joins.append(path)
        return Position(path=path, serial=len(self.joins))

    def get(self, parent: Position, name: str) -> str:
        return f"{parent.path}.{name}" if parent.path else name

    def fetch(self, name: str) -> None:
        if name in self._failing_fetches:
            raise RuntimeError(f"cannot fetch {name}")
        self.fetches.append(name)

    def distinct(self) -> None:
        self.is_distinct = True

    def equal(self, attribute: str, value: Any) -> tuple:
        return ("eq", attribute, value)

    def contains(self, attribute: str, needle: str) -> tuple:
        return ("contains", attribute, needle)

    def between(self, attribute: str, lower: Any, upper: Any) -> tuple:
        return ("between", attribute, lower, upper)

    def greater_or_equal(self, attribute: str, value: Any) -> tuple:
        return ("ge", attribute, value)

    def less_or_equal(self, attribute: str, value: Any) -> tuple:
        return ("le", attribute, value)

    def in_(self, attribute: str, values: Sequence[Any]) -> tuple:
        return ("in", attribute, tuple(values))

    def and_(self, *expressions: Any) -> tuple:
        return ("and", *expressions)

    def or_(self, *expressions: Any) -> tuple:
        return ("or", *expressions)

    def conjunction(self) -> tuple:
        return ("true",)


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def make_engine() -> type[RecordingEngine]:
    return RecordingEngine


@pytest.fixture(autouse=True)
def _isolated_field_cache() -> Iterator[None]:
    """Give every test an empty descriptor metadata cache."""

    saved = dict(metadata._FIELD_CACHE)
    metadata._FIELD_CACHE.clear()
    yield
    metadata._FIELD_CACHE.clear()
    metadata._FIELD_CACHE.update(saved)
