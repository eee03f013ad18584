"""Category lookups shared by several routers."""
from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.domain.categories.models import Category
from kakeibo.domain.recurring.models import RecurringTransaction
from kakeibo.domain.transactions.models import Transaction

logger = logging.getLogger(__name__)


async def list_categories(db: AsyncSession) -> list[Category]:
    result = await db.execute(select(Category).order_by(Category.type, Category.id))
    return list(result.scalars().all())


async def get_category_or_404(db: AsyncSession, category_id: int) -> Category:
    """Return the category or raise 404."""
    category = await db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


async def ensure_category_exists(db: AsyncSession, category_id: int) -> None:
    """Reject payloads pointing at a missing category with a per-field 422."""
    if await db.get(Category, category_id) is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[
                {
                    "loc": ["body", "category_id"],
                    "msg": "Category does not exist",
                    "type": "value_error.missing_reference",
                }
            ],
        )


async def count_category_references(db: AsyncSession, category_id: int) -> tuple[int, int]:
    """Number of transactions and recurring rules that use the category."""
    transactions = await db.execute(
        select(func.count(Transaction.id)).where(Transaction.category_id == category_id)
    )
    rules = await db.execute(
        select(func.count(RecurringTransaction.id)).where(RecurringTransaction.category_id == category_id)
    )
    return transactions.scalar_one(), rules.scalar_one()


async def commit_category_reference(db: AsyncSession, entity: str) -> None:
    """Commit a row that points at a category, mapping FK failures to 422."""
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("IntegrityError while saving %s", entity, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Could not save {entity}: category does not exist",
        ) from None
