"""Tests for catalog session settings and pool construction (no database needed)."""

from __future__ import annotations

from typing import Any

import pytest

from src.db.pool import create_pool
from src.db.session import configure_session, session_statements


def _rendered(**options: Any) -> list[str]:
    return [statement.as_string(None) for statement in session_statements(**options)]


class _FakeCursor:
    def __init__(self, executed: list[str]) -> None:
        self._executed = executed

    async def __aenter__(self) -> _FakeCursor:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    async def execute(self, statement: Any, prepare: bool | None = None) -> None:
        self._executed.append(statement.as_string(None))


class _FakeConnection:
    def __init__(self) -> None:
        self.executed: list[str] = []
        self.commits = 0

    def cursor(self) -> _FakeCursor:
        return _FakeCursor(self.executed)

    async def commit(self) -> None:
        self.commits += 1


def test_default_session_is_utc_only() -> None:
    assert _rendered() == ["SET TIME ZONE 'UTC'"]


def test_timeout_and_schema_follow_utc() -> None:
    assert _rendered(statement_timeout_ms=2500, search_path="catalog") == [
        "SET TIME ZONE 'UTC'",
        "SET statement_timeout = 2500",
        'SET search_path TO "catalog"',
    ]


@pytest.mark.parametrize("timeout_ms", [0, -1])
def test_non_positive_timeout_is_rejected(timeout_ms: int) -> None:
    with pytest.raises(ValueError, match="statement_timeout_ms"):
        session_statements(statement_timeout_ms=timeout_ms)


@pytest.mark.parametrize("schema", ["Catalog", "cat-alog", "catalog; DROP TABLE products", ""])
def test_invalid_schema_is_rejected(schema: str) -> None:
    with pytest.raises(ValueError, match="Invalid schema name"):
        session_statements(search_path=schema)


@pytest.mark.asyncio
async def test_configure_session_applies_statements_and_commits() -> None:
    conn = _FakeConnection()

    await configure_session(conn, statement_timeout_ms=1000)  # type: ignore[arg-type]

    assert conn.executed == ["SET TIME ZONE 'UTC'", "SET statement_timeout = 1000"]
    assert conn.commits == 1


def test_create_pool_rejects_invalid_session_options_eagerly() -> None:
    with pytest.raises(ValueError):
        create_pool("postgresql://localhost/catalog", statement_timeout_ms=0)


@pytest.mark.asyncio
async def test_create_pool_is_not_opened() -> None:
    pool = create_pool("postgresql://localhost/catalog", max_size=3, statement_timeout_ms=500)

    assert pool.max_size == 3
    assert pool.closed is True
