"""Balance aggregation for the calendar dashboard and the transaction list."""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Mapping, Protocol, TypedDict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kakeibo.domain.enums import FlowType, PayerType, payer_label
from kakeibo.domain.transactions.models import Transaction


class Balance(TypedDict):
    income: int
    expense: int
    balance: int


class PayerBalance(TypedDict):
    label: str
    balance: int


class _Entry(Protocol):
    date: date
    type: FlowType
    payer: PayerType
    amount: int


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first day of the month and the first day of the next one."""
    first_day = date(year, month, 1)
    if month == 12:
        return first_day, date(year + 1, 1, 1)
    return first_day, date(year, month + 1, 1)


def calculate_balance(transactions: Iterable[_Entry]) -> Balance:
    """Sum income and expense amounts; balance is income minus expense."""
    income = 0
    expense = 0
    for transaction in transactions:
        if transaction.type == FlowType.INCOME:
            income += transaction.amount
        elif transaction.type == FlowType.EXPENSE:
            expense += transaction.amount

    return {
        "income": income,
        "expense": expense,
        "balance": income - expense,
    }


def calculate_daily_balances(transactions: Iterable[_Entry]) -> dict[int, Balance]:
    """Group by day of month and compute a balance per day.

    Only days with at least one transaction appear in the result.
    """
    grouped: dict[int, list[_Entry]] = defaultdict(list)
    for transaction in transactions:
        grouped[transaction.date.day].append(transaction)

    return {day: calculate_balance(grouped[day]) for day in sorted(grouped)}


def calculate_payer_balances(
    transactions: Iterable[_Entry],
    labels: Mapping[str, str],
) -> dict[str, PayerBalance]:
    """Net balance per payer, with one entry for every payer even if unused."""
    entries = list(transactions)
    payer_balances: dict[str, PayerBalance] = {}

    for payer in PayerType:
        totals = calculate_balance(t for t in entries if t.payer == payer)
        payer_balances[payer.value] = {
            "label": payer_label(payer, labels),
            "balance": totals["balance"],
        }

    return payer_balances


async def get_monthly_transactions(db: AsyncSession, year: int, month: int) -> list[Transaction]:
    """Return every transaction dated within the given month."""
    first_day, next_month = month_bounds(year, month)
    result = await db.execute(
        select(Transaction)
        .where(Transaction.date >= first_day)
        .where(Transaction.date < next_month)
        .order_by(Transaction.date, Transaction.id)
    )
    return list(result.scalars().all())


async def get_transactions_by_date(db: AsyncSession, target: date) -> list[Transaction]:
    """Return the transactions of a single day with their category loaded."""
    result = await db.execute(
        select(Transaction)
        .options(selectinload(Transaction.category))
        .where(Transaction.date == target)
        .order_by(Transaction.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


__all__ = [
    "Balance",
    "PayerBalance",
    "calculate_balance",
    "calculate_daily_balances",
    "calculate_payer_balances",
    "get_monthly_transactions",
    "get_transactions_by_date",
    "month_bounds",
]
