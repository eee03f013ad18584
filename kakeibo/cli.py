"""Command line entry point for the daily recurring generation job.

Run from cron (or by hand)::

    kakeibo-generate-recurring                 # today
    kakeibo-generate-recurring --date 2026-01-15 --json
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, datetime
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kakeibo.core.validation import MAX_YEAR
from kakeibo.domain import models  # noqa: F401
from kakeibo.domain.recurring.services import GenerationResult, generate_recurring_transactions

logger = logging.getLogger(__name__)


def _iso_date(value: str) -> date:
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from None
    if parsed.year > MAX_YEAR:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', year must be at most {MAX_YEAR}")
    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate this month's transactions from recurring rules due on a date",
    )
    parser.add_argument(
        "--date",
        type=_iso_date,
        default=None,
        help="Target date (YYYY-MM-DD, default: today)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as a JSON object instead of a summary line",
    )
    return parser.parse_args(argv)


def format_result(result: GenerationResult, as_json: bool = False) -> str:
    if as_json:
        return json.dumps(
            {"date": result.date.isoformat(), "created": result.created, "skipped": result.skipped}
        )
    return f"{result.date.isoformat()}: created {result.created}, skipped {result.skipped}"


async def run(
    target_date: Optional[date],
    session_factory: async_sessionmaker[AsyncSession],
) -> GenerationResult:
    async with session_factory() as session:
        return await generate_recurring_transactions(session, target_date)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    from kakeibo.core.database import AsyncSessionLocal, engine
    from kakeibo.core.logging_config import setup_logging

    setup_logging("recurring.log")

    async def _run() -> GenerationResult:
        try:
            return await run(args.date, AsyncSessionLocal)
        finally:
            await engine.dispose()

    try:
        result = asyncio.run(_run())
    except Exception:  # noqa: BLE001
        logger.error("Recurring generation failed", exc_info=True)
        return 1

    print(format_result(result, as_json=args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
