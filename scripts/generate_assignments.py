#!/usr/bin/env python3
"""Generate task assignments for one household from the command line.

Usage:
    uv run python scripts/generate_assignments.py --household 1
    uv run python scripts/generate_assignments.py --household 1 --start 2026-01-05 --days 14 --db ./data/dev.db
"""

import argparse
import asyncio
import logging
import sys
from datetime import UTC, date, datetime

from src.core import db_client
from src.core.config import settings
from src.models.service_models import GenerationResult
from src.services.assignment_generator import generate_assignments


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Generate task assignments for a household.")
    parser.add_argument("--household", required=True, help="Household ID to generate assignments for")
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=None,
        help="First date to generate (YYYY-MM-DD, default: today UTC)",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=settings.generation_horizon_days,
        help=f"Number of days to generate (default: {settings.generation_horizon_days})",
    )
    parser.add_argument("--db", default=None, help="SQLite database path (default: SQLITE_DB_PATH)")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> GenerationResult:
    """Initialise the schema and run one generation."""
    if args.db:
        settings.sqlite_db_path = args.db

    await db_client.init_db()
    try:
        start_date = args.start or datetime.now(UTC).date()
        return await generate_assignments(args.household, start_date, args.days)
    finally:
        await db_client.close_connection()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    result = asyncio.run(run(args))

    logger.info(result.model_dump_json(indent=2))
    return 1 if result.errors else 0


if __name__ == "__main__":
    sys.exit(main())
