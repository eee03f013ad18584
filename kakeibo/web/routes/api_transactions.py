"""API routes for listing and editing transactions."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kakeibo.core.database import get_db
from kakeibo.domain.categories.services import (
    commit_category_reference,
    ensure_category_exists,
    list_categories,
)
from kakeibo.domain.enums import payer_options
from kakeibo.domain.transactions.filters import (
    apply_transaction_filter,
    build_transaction_filter,
    list_year_months,
)
from kakeibo.domain.transactions.models import Transaction
from kakeibo.domain.transactions.schemas import (
    TransactionCreate,
    TransactionListResponse,
    TransactionOut,
    TransactionUpdate,
)
from kakeibo.services.dashboard import calculate_balance
from kakeibo.web.dependencies import get_payer_labels, get_today

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("date", "type", "category_id", "payer", "amount")


async def _load_transaction(db: AsyncSession, transaction_id: int) -> Transaction:
    """Return the transaction with its category attached, or raise 404."""
    result = await db.execute(
        select(Transaction)
        .options(selectinload(Transaction.category))
        .where(Transaction.id == transaction_id)
        .execution_options(populate_existing=True)
    )
    transaction = result.scalar_one_or_none()
    if not transaction:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return transaction


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    category_id: Optional[str] = Query(default=None),
    payer: Optional[str] = Query(default=None),
    type: Optional[str] = Query(default=None),
    memo: Optional[str] = Query(default=None),
    year_month: Optional[str] = Query(
        default=None,
        description="YYYY-MM; omit for the current month, send empty for all months",
    ),
    today: date = Depends(get_today),
    labels: dict[str, str] = Depends(get_payer_labels),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Filtered transactions (newest first) with an income/expense summary."""
    criteria = build_transaction_filter(
        today=today,
        category_id=category_id,
        payer=payer,
        flow_type=type,
        memo=memo,
        year_month=year_month,
    )

    stmt = apply_transaction_filter(
        select(Transaction).options(selectinload(Transaction.category)),
        criteria,
    ).order_by(Transaction.date.desc(), Transaction.id.desc())
    result = await db.execute(stmt)
    transactions = list(result.scalars().all())

    return {
        "transactions": transactions,
        "filters": criteria.as_dict(),
        "summary": calculate_balance(transactions),
        "yearMonths": await list_year_months(db, today),
        "categories": await list_categories(db),
        "payers": payer_options(labels),
    }


@router.post("", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    db: AsyncSession = Depends(get_db),
) -> Transaction:
    """Record a manually entered transaction."""
    await ensure_category_exists(db, payload.category_id)

    transaction = Transaction(**payload.model_dump())
    db.add(transaction)
    await commit_category_reference(db, "transaction")

    logger.info(
        "Created transaction %s: %s %s on %s",
        transaction.id,
        transaction.type.value,
        transaction.amount,
        transaction.date.isoformat(),
    )
    return await _load_transaction(db, transaction.id)


@router.get("/{transaction_id}", response_model=TransactionOut)
async def get_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
) -> Transaction:
    return await _load_transaction(db, transaction_id)


@router.put("/{transaction_id}", response_model=TransactionOut)
async def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    db: AsyncSession = Depends(get_db),
) -> Transaction:
    """Update the fields present in the payload."""
    transaction = await _load_transaction(db, transaction_id)

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
        setattr(transaction, field, value)

    await commit_category_reference(db, "transaction")
    return await _load_transaction(db, transaction_id)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    transaction = await _load_transaction(db, transaction_id)
    await db.delete(transaction)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
