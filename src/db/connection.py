"""Synchronous catalog connections (migrations, test fixtures)."""

from __future__ import annotations

import os

import psycopg

from src.db.session import session_statements


def require_database_url() -> str:
    """Read `DATABASE_URL` from the environment or raise a clear error."""

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL is required (set it in .env or environment)")
    return database_url


def connect_session(
        database_url: str,
        *,
        statement_timeout_ms: int | None = None,
        search_path: str | None = None,
) -> psycopg.Connection:
    """Connect to Postgres and apply the catalog session settings (UTC, timeout, schema)."""

    conn = psycopg.connect(database_url)
    for statement in session_statements(
            statement_timeout_ms=statement_timeout_ms,
            search_path=search_path,
    ):
        conn.execute(statement, prepare=False)
    return conn
