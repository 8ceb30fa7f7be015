"""Tests for descriptor intent extraction and its process-wide cache."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Annotated

import pytest
from pydantic import BaseModel

from src.criteria import metadata
from src.criteria.errors import DescriptorAccessError, DescriptorError
from src.criteria.markers import Operation, QueryPath, QueryRange, QueryTerm, Range
from src.criteria.metadata import FieldIntent, IntentKind, get_field_intents


class BookSearch(BaseModel):
    term: Annotated[str | None, QueryTerm("title", "author.name")] = None
    year: Annotated[Range[int] | None, QueryRange("published_year")] = None
    publisher: Annotated[str | None, QueryPath("publisher.name", operation=Operation.like)] = None
    isbn: str | None = None


@dataclass
class OrderSearch:
    customer_city: Annotated[str | None, QueryPath("customer.address.city")] = None
    total: Annotated[Range[float] | None, QueryRange("total")] = None
    status: str | None = None


@dataclass
class DoubleTagged:
    value: Annotated[str | None, QueryTerm("a"), QueryPath("b")] = None


class NotADescriptor:
    term: str | None = None


def test_pydantic_descriptor_intents_follow_declaration_order() -> None:
    intents = get_field_intents(BookSearch)

    assert [i.name for i in intents] == ["term", "year", "publisher", "isbn"]
    assert intents[0] == FieldIntent(
        name="term",
        kind=IntentKind.multi_path_term,
        paths=("title", "author.name"),
        operation=Operation.like,
    )
    assert intents[1].kind == IntentKind.range
    assert intents[1].paths == ("published_year",)
    assert intents[2].kind == IntentKind.single_path
    assert intents[2].operation == Operation.like


def test_unmarked_field_defaults_to_equality_on_own_name() -> None:
    isbn = get_field_intents(BookSearch)[3]

    assert isbn.kind == IntentKind.single_path
    assert isbn.paths == ("isbn",)
    assert isbn.operation == Operation.equal


def test_dataclass_descriptor_is_supported() -> None:
    intents = get_field_intents(OrderSearch)

    assert [(i.name, i.kind) for i in intents] == [
        ("customer_city", IntentKind.single_path),
        ("total", IntentKind.range),
        ("status", IntentKind.single_path),
    ]
    assert intents[0].paths == ("customer.address.city",)


def test_more_than_one_marker_is_rejected() -> None:
    with pytest.raises(DescriptorError, match="more than one intent"):
        get_field_intents(DoubleTagged)


def test_unsupported_descriptor_type_is_rejected() -> None:
    with pytest.raises(DescriptorError):
        get_field_intents(NotADescriptor)


def test_marker_paths_are_validated() -> None:
    with pytest.raises(ValueError):
        QueryTerm()
    with pytest.raises(ValueError):
        QueryPath("customer..city")
    with pytest.raises(ValueError):
        QueryRange(" ")


def test_read_wraps_missing_attribute_with_field_name() -> None:
    intent = get_field_intents(BookSearch)[0]

    with pytest.raises(DescriptorAccessError) as exc_info:
        intent.read(object())

    assert exc_info.value.field_name == "term"
    assert "term" in str(exc_info.value)


def test_extraction_runs_once_per_type(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[type] = []
    original = metadata._extract_field_intents

    def _counting(descriptor_type: type) -> tuple[FieldIntent, ...]:
        calls.append(descriptor_type)
        return original(descriptor_type)

    monkeypatch.setattr(metadata, "_extract_field_intents", _counting)

    first = get_field_intents(BookSearch)
    second = get_field_intents(BookSearch)
    get_field_intents(OrderSearch)

    assert first is second
    assert calls == [BookSearch, OrderSearch]


def test_concurrent_first_access_extracts_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[type] = []
    original = metadata._extract_field_intents

    def _slow(descriptor_type: type) -> tuple[FieldIntent, ...]:
        calls.append(descriptor_type)
        time.sleep(0.05)
        return original(descriptor_type)

    monkeypatch.setattr(metadata, "_extract_field_intents", _slow)

    barrier = threading.Barrier(8)
    results: list[tuple[FieldIntent, ...]] = []
    lock = threading.Lock()

    def _worker() -> None:
        barrier.wait()
        intents = get_field_intents(OrderSearch)
        with lock:
            results.append(intents)

    threads = [threading.Thread(target=_worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls == [OrderSearch]
    assert len(results) == 8
    assert all(r is results[0] for r in results)
