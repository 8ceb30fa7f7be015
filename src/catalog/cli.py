"""Command-line product search.

Example:
    python -m src.catalog.cli --criteria '{"term": "phone", "price_range": {"from": 100}}'
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from src.app import create_app
from src.catalog.search import ProductSearch
from src.catalog.service import search_products
from src.config.logging import configure_logging
from src.config.settings import load_settings

logger = logging.getLogger(__name__)


async def run(criteria: ProductSearch) -> int:
    """Run one search and print the matching rows as JSON."""

    settings = load_settings()
    configure_logging(settings.log_level, criteria_level=settings.criteria_log_level)

    app = create_app(settings)
    await app.pool.open(wait=True)
    try:
        rows = await search_products(app, criteria)
    finally:
        await app.pool.close()

    json.dump(rows, sys.stdout, default=str, indent=2)
    sys.stdout.write("\n")
    return 0


def main() -> None:
    """CLI entry point for product search."""

    parser = argparse.ArgumentParser(description="Search the product catalog.")
    parser.add_argument(
        "--criteria",
        default="{}",
        help="ProductSearch as a JSON object (omitted fields do not filter).",
    )
    args = parser.parse_args()

    try:
        criteria = ProductSearch.model_validate_json(args.criteria)
    except ValidationError as exc:
        parser.error(f"invalid criteria: {exc}")

    sys.exit(asyncio.run(run(criteria)))


if __name__ == "__main__":
    main()
