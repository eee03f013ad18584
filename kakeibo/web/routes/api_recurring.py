"""API routes for recurring transaction rules and manual generation runs."""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kakeibo.core.database import get_db
from kakeibo.core.validation import parse_iso_date
from kakeibo.domain.categories.services import commit_category_reference, ensure_category_exists
from kakeibo.domain.recurring.models import RecurringTransaction
from kakeibo.domain.recurring.schemas import (
    GenerationResponse,
    RecurringTransactionCreate,
    RecurringTransactionOut,
    RecurringTransactionUpdate,
)
from kakeibo.domain.recurring.services import generate_recurring_transactions
from kakeibo.domain.transactions.models import Transaction
from kakeibo.web.dependencies import get_today

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("name", "day_of_month", "type", "category_id", "payer", "amount", "is_active")


async def _load_rule(db: AsyncSession, rule_id: int) -> RecurringTransaction:
    result = await db.execute(
        select(RecurringTransaction)
        .options(selectinload(RecurringTransaction.category))
        .where(RecurringTransaction.id == rule_id)
        .execution_options(populate_existing=True)
    )
    rule = result.scalar_one_or_none()
    if not rule:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recurring transaction not found")
    return rule


@router.get("", response_model=list[RecurringTransactionOut])
async def list_recurring_transactions(db: AsyncSession = Depends(get_db)) -> list[RecurringTransaction]:
    """All rules ordered by the day they fire."""
    result = await db.execute(
        select(RecurringTransaction)
        .options(selectinload(RecurringTransaction.category))
        .order_by(RecurringTransaction.day_of_month, RecurringTransaction.id)
    )
    return list(result.scalars().all())


@router.post("", response_model=RecurringTransactionOut, status_code=status.HTTP_201_CREATED)
async def create_recurring_transaction(
    payload: RecurringTransactionCreate,
    db: AsyncSession = Depends(get_db),
) -> RecurringTransaction:
    await ensure_category_exists(db, payload.category_id)

    rule = RecurringTransaction(**payload.model_dump())
    db.add(rule)
    await commit_category_reference(db, "recurring transaction")

    logger.info("Created recurring transaction %s (%r) on day %s", rule.id, rule.name, rule.day_of_month)
    return await _load_rule(db, rule.id)


@router.post("/generate", response_model=GenerationResponse)
async def run_generation(
    date_param: Optional[str] = Query(default=None, alias="date", description="YYYY-MM-DD, default today"),
    today: date = Depends(get_today),
    db: AsyncSession = Depends(get_db),
) -> GenerationResponse:
    """Manually trigger the generation job for one date."""
    target_date = parse_iso_date(date_param) if date_param else today
    result = await generate_recurring_transactions(db, target_date)
    return GenerationResponse(date=result.date, created=result.created, skipped=result.skipped)


@router.get("/{rule_id}", response_model=RecurringTransactionOut)
async def get_recurring_transaction(
    rule_id: int,
    db: AsyncSession = Depends(get_db),
) -> RecurringTransaction:
    return await _load_rule(db, rule_id)


@router.put("/{rule_id}", response_model=RecurringTransactionOut)
async def update_recurring_transaction(
    rule_id: int,
    payload: RecurringTransactionUpdate,
    db: AsyncSession = Depends(get_db),
) -> RecurringTransaction:
    """Edit a rule; already generated transactions are left untouched."""
    rule = await _load_rule(db, rule_id)

    update_data = payload.model_dump(exclude_unset=True)
    for required in REQUIRED_FIELDS:
        if required in update_data and update_data[required] is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"{required} cannot be null",
            )

    if "category_id" in update_data:
        await ensure_category_exists(db, update_data["category_id"])

    for field, value in update_data.items():
        setattr(rule, field, value)

    await commit_category_reference(db, "recurring transaction")
    return await _load_rule(db, rule_id)


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recurring_transaction(
    rule_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a rule, detaching the transactions it generated."""
    rule = await _load_rule(db, rule_id)

    detached = await db.execute(
        update(Transaction)
        .where(Transaction.recurring_transaction_id == rule_id)
        .values(recurring_transaction_id=None)
    )
    await db.delete(rule)
    await db.commit()

    logger.info("Deleted recurring transaction %s; detached %s transaction(s)", rule_id, detached.rowcount or 0)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
