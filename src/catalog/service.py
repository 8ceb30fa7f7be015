"""Product search over the catalog database."""

from __future__ import annotations

import logging
from time import monotonic
from typing import Any

from src.app import App
from src.catalog.graph import PRODUCT
from src.catalog.search import ProductSearch
from src.db.pool import get_conn
from src.db.query import fetch_rows
from src.sql.builder import build_query

logger = logging.getLogger(__name__)


async def search_products(app: App, criteria: ProductSearch) -> list[dict[str, Any]]:
    """Return every product row matching `criteria`."""

    started = monotonic()
    built = build_query(
        criteria,
        app.graph,
        PRODUCT,
        eager_fetch=app.settings.eager_fetch_enabled,
    )

    async with get_conn(app.pool) as conn:
        rows = await fetch_rows(conn, built.sql, built.params)

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "search entity=%s filters=%s rows=%d latency_ms=%d",
        PRODUCT,
        sorted(criteria.model_dump(exclude_none=True)),
        len(rows),
        latency_ms,
    )
    return rows
