"""Per-session settings applied to every catalog connection.

Timestamp range bounds are bound as UTC values, so every session runs in UTC. A search also gets an
optional server-side statement timeout and an optional schema to resolve catalog tables in.
"""

from __future__ import annotations

import re

from psycopg import AsyncConnection, sql

_SCHEMA_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def session_statements(
        *,
        statement_timeout_ms: int | None = None,
        search_path: str | None = None,
) -> list[sql.Composable]:
    """Return the `SET` statements that configure a catalog session, in execution order."""

    statements: list[sql.Composable] = [sql.SQL("SET TIME ZONE 'UTC'")]

    if statement_timeout_ms is not None:
        if statement_timeout_ms <= 0:
            raise ValueError(f"statement_timeout_ms must be positive, got {statement_timeout_ms}")
        statements.append(
            sql.SQL("SET statement_timeout = {}").format(sql.Literal(int(statement_timeout_ms)))
        )

    if search_path is not None:
        if not _SCHEMA_RE.match(search_path):
            raise ValueError(f"Invalid schema name: {search_path!r}")
        statements.append(sql.SQL("SET search_path TO {}").format(sql.Identifier(search_path)))

    return statements


async def configure_session(
        conn: AsyncConnection,
        *,
        statement_timeout_ms: int | None = None,
        search_path: str | None = None,
) -> None:
    """Apply `session_statements` to `conn`; used as the pool's `configure` callback."""

    statements = session_statements(
        statement_timeout_ms=statement_timeout_ms,
        search_path=search_path,
    )
    async with conn.cursor() as cur:
        for statement in statements:
            await cur.execute(statement, prepare=False)
    # `SET` starts a transaction when autocommit is disabled; commit so the pool doesn't see INTRANS.
    await conn.commit()
