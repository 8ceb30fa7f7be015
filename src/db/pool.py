"""Async Postgres connection pool for catalog searches.

Each new pooled connection is configured once by `configure_session`: UTC timezone, and the
optional statement timeout and schema from settings.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator

from dotenv import load_dotenv
from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from src.db.connection import require_database_url
from src.db.session import configure_session, session_statements


def create_pool(
        database_url: str | None = None,
        *,
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
        statement_timeout_ms: int | None = None,
        search_path: str | None = None,
) -> AsyncConnectionPool:
    """Create an async DB pool.

    Notes:
        - The returned pool is created with `open=False`. Call `await pool.open()` at startup.
        - If `database_url` is omitted, the function loads `.env` and reads `DATABASE_URL`.
        - Invalid session options raise `ValueError` here, not on first connection.
    """

    if database_url is None:
        load_dotenv(".env")
        database_url = require_database_url()

    session_statements(statement_timeout_ms=statement_timeout_ms, search_path=search_path)

    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
        configure=partial(
            configure_session,
            statement_timeout_ms=statement_timeout_ms,
            search_path=search_path,
        ),
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    """Acquire a configured connection; it returns to the pool on exit."""

    async with pool.connection() as conn:
        yield conn
