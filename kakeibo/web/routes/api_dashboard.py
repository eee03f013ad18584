"""API routes backing the calendar dashboard."""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.database import get_db
from kakeibo.core.validation import parse_iso_date
from kakeibo.domain.categories.schemas import CategoryOut
from kakeibo.domain.categories.services import list_categories
from kakeibo.domain.enums import payer_options
from kakeibo.domain.transactions.schemas import TransactionOut
from kakeibo.services.dashboard import (
    calculate_balance,
    calculate_daily_balances,
    calculate_payer_balances,
    get_monthly_transactions,
    get_transactions_by_date,
)
from kakeibo.web.dependencies import get_payer_labels, get_today

router = APIRouter()


@router.get("")
async def get_dashboard(
    year: int | None = Query(default=None, ge=1900, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
    today: date = Depends(get_today),
    labels: dict[str, str] = Depends(get_payer_labels),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Daily and monthly balances for one month, defaulting to the current one."""
    target_year = year or today.year
    target_month = month or today.month

    transactions = await get_monthly_transactions(db, target_year, target_month)
    categories = await list_categories(db)

    return {
        "year": target_year,
        "month": target_month,
        "dailyBalances": calculate_daily_balances(transactions),
        "monthlyBalance": calculate_balance(transactions),
        "payerBalances": calculate_payer_balances(transactions, labels),
        "categories": [CategoryOut.model_validate(category) for category in categories],
        "payers": payer_options(labels),
    }


@router.get("/transactions")
async def get_dashboard_transactions(
    date_param: Optional[str] = Query(default=None, alias="date", description="YYYY-MM-DD"),
    db: AsyncSession = Depends(get_db),
) -> dict[str, list[TransactionOut]]:
    """Transactions of one calendar day, each with its category."""
    target = parse_iso_date(date_param)
    transactions = await get_transactions_by_date(db, target)
    return {"transactions": [TransactionOut.model_validate(t) for t in transactions]}
