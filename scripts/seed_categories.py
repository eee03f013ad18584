"""Seed the default household categories."""

import argparse
import asyncio
from pathlib import Path
import sys
from typing import List

from sqlalchemy import select

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from kakeibo.core.database import AsyncSessionLocal, init_db  # noqa: E402
from kakeibo.domain.categories.models import Category  # noqa: E402
from kakeibo.domain.enums import FlowType  # noqa: E402

DEFAULT_CATEGORIES: List[dict] = [
    # Expenses
    {"name": "Groceries", "type": FlowType.EXPENSE},
    {"name": "Person A spending", "type": FlowType.EXPENSE},
    {"name": "Person B spending", "type": FlowType.EXPENSE},
    {"name": "Dates", "type": FlowType.EXPENSE},
    {"name": "Utilities", "type": FlowType.EXPENSE},
    {"name": "Insurance", "type": FlowType.EXPENSE},
    {"name": "Rent", "type": FlowType.EXPENSE},
    {"name": "Toiletries", "type": FlowType.EXPENSE},
    {"name": "Household goods", "type": FlowType.EXPENSE},
    {"name": "Special expenses", "type": FlowType.EXPENSE},
    # Income
    {"name": "Person A salary", "type": FlowType.INCOME},
    {"name": "Person B salary", "type": FlowType.INCOME},
    {"name": "Person A bonus", "type": FlowType.INCOME},
    {"name": "Person B bonus", "type": FlowType.INCOME},
    {"name": "Other income", "type": FlowType.INCOME},
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed default income and expense categories")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (local sqlite setups without alembic)",
    )
    return parser.parse_args()


async def seed_categories(create_tables: bool = False) -> int:
    if create_tables:
        await init_db()

    async with AsyncSessionLocal() as session:
        existing = await session.execute(select(Category.name))
        existing_names = {row[0] for row in existing.all()}

        added = 0
        for category in DEFAULT_CATEGORIES:
            if category["name"] in existing_names:
                continue
            session.add(Category(**category))
            added += 1

        await session.commit()
    return added


if __name__ == "__main__":
    args = parse_args()
    added = asyncio.run(seed_categories(args.create_tables))
    print(f"Seeded {added} categories.")
