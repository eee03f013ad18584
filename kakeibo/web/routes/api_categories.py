"""API routes for managing categories."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.database import get_db
from kakeibo.domain.categories.models import Category
from kakeibo.domain.categories.schemas import (
    CategoryCreate,
    CategoryOut,
    CategoryReassignRequest,
    CategoryUpdate,
)
from kakeibo.domain.categories.services import (
    count_category_references,
    get_category_or_404,
    list_categories,
)
from kakeibo.domain.recurring.models import RecurringTransaction
from kakeibo.domain.transactions.models import Transaction

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_NAME_DETAIL = "Category with this name already exists"


async def _ensure_unique_name(db: AsyncSession, name: str, exclude_id: int | None = None) -> None:
    stmt = select(Category.id).where(Category.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    existing = await db.execute(stmt)
    if existing.first() is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_NAME_DETAIL)


@router.get("", response_model=list[CategoryOut])
async def get_categories(db: AsyncSession = Depends(get_db)) -> list[Category]:
    """Return all categories grouped by type."""
    return await list_categories(db)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_db),
) -> Category:
    """Create a new category."""
    await _ensure_unique_name(db, payload.name)

    category = Category(**payload.model_dump())
    db.add(category)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("IntegrityError while creating category %r", payload.name, exc_info=True)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_NAME_DETAIL) from None

    await db.refresh(category)
    return category


@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
) -> Category:
    """Update a category."""
    category = await get_category_or_404(db, category_id)

    update_data = payload.model_dump(exclude_unset=True)
    if not update_data:
        return category

    for required in ("name", "type"):
        if required in update_data and update_data[required] is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{required} cannot be null",
            )

    if "name" in update_data:
        await _ensure_unique_name(db, update_data["name"], exclude_id=category_id)

    for field, value in update_data.items():
        setattr(category, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("IntegrityError while updating category %s", category_id, exc_info=True)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_NAME_DETAIL) from None

    await db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a category if no transaction or recurring rule uses it."""
    category = await get_category_or_404(db, category_id)

    transaction_count, rule_count = await count_category_references(db, category_id)
    if transaction_count or rule_count:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=(
                f"Category is used by {transaction_count} transaction(s) and "
                f"{rule_count} recurring rule(s). Reassign them before deleting."
            ),
        )

    await db.delete(category)
    await db.commit()
    logger.info("Deleted category %s (%r)", category_id, category.name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{category_id}/reassign")
async def reassign_category(
    category_id: int,
    payload: CategoryReassignRequest,
    db: AsyncSession = Depends(get_db),
) -> dict[str, int]:
    """Move every transaction and recurring rule to another category."""
    source_category = await get_category_or_404(db, category_id)
    target_category = await get_category_or_404(db, payload.new_category_id)

    if source_category.id == target_category.id:
        return {"moved": 0, "movedRules": 0}

    moved = await db.execute(
        update(Transaction)
        .where(Transaction.category_id == source_category.id)
        .values(category_id=target_category.id)
    )
    moved_rules = await db.execute(
        update(RecurringTransaction)
        .where(RecurringTransaction.category_id == source_category.id)
        .values(category_id=target_category.id)
    )

    await db.commit()

    return {"moved": moved.rowcount or 0, "movedRules": moved_rules.rowcount or 0}
