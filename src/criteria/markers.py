"""Intent markers attached to descriptor fields via `typing.Annotated`.

Example:

    class ProductSearch(BaseModel):
        term: Annotated[str | None, QueryTerm("name", "description")] = None
        price: Annotated[Range[Decimal] | None, QueryRange("price")] = None
        category: Annotated[str | None, QueryPath("category.name")] = None
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Operation(StrEnum):
    """Comparison applied to a resolved path."""

    equal = "equal"
    like = "like"


def _validate_path(path: str) -> str:
    if not isinstance(path, str) or not path.strip():
        raise ValueError("path must be a non-empty string")
    if any(not segment for segment in path.split(".")):
        raise ValueError(f"path has an empty segment: {path!r}")
    return path


@dataclass(frozen=True, init=False)
class QueryTerm:
    """Free-text term matched against several paths, combined with OR."""

    paths: tuple[str, ...]
    operation: Operation

    def __init__(self, *paths: str, operation: Operation = Operation.like) -> None:
        if not paths:
            raise ValueError("QueryTerm requires at least one path")
        object.__setattr__(self, "paths", tuple(_validate_path(p) for p in paths))
        object.__setattr__(self, "operation", Operation(operation))


@dataclass(frozen=True)
class QueryRange:
    """Inclusive range comparison against a single path."""

    path: str

    def __post_init__(self) -> None:
        _validate_path(self.path)


@dataclass(frozen=True)
class QueryPath:
    """Direct (or membership, for collections) match against a single path."""

    path: str
    operation: Operation = Operation.equal

    def __post_init__(self) -> None:
        _validate_path(self.path)
        object.__setattr__(self, "operation", Operation(self.operation))


class Range(BaseModel, Generic[T]):
    """Optional lower/upper bounds; either side may be omitted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    from_: T | None = Field(default=None, alias="from")
    to: T | None = None
