"""Application composition root: settings, the configured DB pool and the catalog entity graph."""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from src.catalog.graph import CATALOG_GRAPH
from src.config.settings import Settings
from src.db.pool import create_pool
from src.sql.schema import EntityGraph


@dataclass(frozen=True)
class App:
    """Shared application dependencies for search callers."""

    settings: Settings
    pool: AsyncConnectionPool
    graph: EntityGraph


def create_app(settings: Settings, graph: EntityGraph = CATALOG_GRAPH) -> App:
    """Create the application container.

    Note:
        The returned DB pool is not opened. Call `await app.pool.open()` at startup.
    """

    pool = create_pool(
        settings.database_url,
        max_size=settings.db_pool_max_size,
        statement_timeout_ms=settings.query_timeout_ms,
        search_path=settings.db_schema,
    )
    return App(settings=settings, pool=pool, graph=graph)
