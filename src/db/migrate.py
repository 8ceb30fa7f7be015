"""Apply SQL migrations to the configured PostgreSQL database.

Migrations are plain `.sql` files under `src/db/migrations/`, applied in lexicographic order.
Applied migration filenames are tracked in the `schema_migrations` table.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import LiteralString, cast

import psycopg
from dotenv import load_dotenv

from src.config.logging import configure_logging
from src.db.connection import connect_session, require_database_url

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

_CATALOG_TABLES = ("reviews", "products", "categories", "departments", "employees")


def _ensure_schema_migrations(conn: psycopg.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations
        (
            filename   TEXT PRIMARY KEY,
            applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
        """,
        prepare=False,
    )


def list_migration_files() -> list[Path]:
    """Return migration files in the order they must be applied."""

    if not MIGRATIONS_DIR.exists():
        raise RuntimeError(f"Migrations directory does not exist: {MIGRATIONS_DIR}")

    files = sorted(p for p in MIGRATIONS_DIR.iterdir() if p.is_file() and p.suffix == ".sql")
    if not files:
        raise RuntimeError(f"No .sql migration files found in {MIGRATIONS_DIR}")
    return files


def _get_applied_migrations(conn: psycopg.Connection) -> set[str]:
    rows = conn.execute("SELECT filename FROM schema_migrations", prepare=False).fetchall()
    return {r[0] for r in rows}


def _apply_migration(conn: psycopg.Connection, filename: str, sql_text: str) -> None:
    with conn.transaction():
        conn.execute(cast(LiteralString, sql_text), prepare=False)
        conn.execute(
            "INSERT INTO schema_migrations(filename) VALUES (%s)",
            (filename,),
            prepare=False,
        )


def migrate(*, recreate: bool, schema: str | None = None) -> None:
    """Run migrations against `DATABASE_URL`, inside `schema` when given."""

    load_dotenv(".env")
    database_url = require_database_url()

    files = list_migration_files()

    with connect_session(database_url, search_path=schema) as conn:
        if recreate:
            for table in _CATALOG_TABLES:
                conn.execute(cast(LiteralString, f"DROP TABLE IF EXISTS {table}"), prepare=False)
            conn.execute("DROP TABLE IF EXISTS schema_migrations", prepare=False)

        _ensure_schema_migrations(conn)
        applied = _get_applied_migrations(conn)

        for file_path in files:
            if file_path.name in applied:
                continue

            sql_text = file_path.read_text(encoding="utf-8")
            _apply_migration(conn, file_path.name, sql_text)
            logger.info("applied migration=%s", file_path.name)


def main() -> None:
    """CLI entry point for applying migrations."""

    load_dotenv(".env")
    parser = argparse.ArgumentParser(description="Apply SQL migrations to Postgres.")
    parser.add_argument(
        "--recreate",
        action="store_true",
        help="Drop existing catalog tables and re-apply all migrations (destructive).",
    )
    parser.add_argument(
        "--schema",
        default=os.getenv("DB_SCHEMA"),
        help="Schema holding the catalog tables (default: DB_SCHEMA, else search_path).",
    )
    args = parser.parse_args()

    configure_logging()
    migrate(recreate=args.recreate, schema=args.schema)


if __name__ == "__main__":
    main()
