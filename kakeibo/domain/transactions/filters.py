"""Composable filter criteria for transaction queries."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy import Select, extract, select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.validation import parse_optional_int, parse_year_month
from kakeibo.domain.enums import FlowType, PayerType
from kakeibo.domain.transactions.models import Transaction
from kakeibo.services.dashboard import month_bounds


@dataclass(frozen=True, slots=True)
class TransactionFilter:
    """Optional criteria; every field that is set narrows the result (AND)."""

    category_id: Optional[int] = None
    payer: Optional[PayerType] = None
    type: Optional[FlowType] = None
    memo: Optional[str] = None
    year_month: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def format_year_month(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def resolve_year_month(raw: Optional[str], today: date) -> Optional[str]:
    """Turn the raw ``year_month`` parameter into the month to show.

    ``None`` means the caller did not send the parameter at all, so the
    current month is shown. An empty string is an explicit reset and
    removes the month restriction.
    """
    if raw is None:
        return format_year_month(today)

    value = raw.strip()
    if value == "":
        return None

    year, month = parse_year_month(value)
    return f"{year:04d}-{month:02d}"


def _parse_enum(enum_cls, value: Optional[str], field: str):
    if value is None or value.strip() == "":
        return None
    try:
        return enum_cls(value.strip())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{field} must be one of: {allowed}",
        ) from None


def build_transaction_filter(
    *,
    today: date,
    category_id: Optional[str] = None,
    payer: Optional[str] = None,
    flow_type: Optional[str] = None,
    memo: Optional[str] = None,
    year_month: Optional[str] = None,
) -> TransactionFilter:
    """Normalize raw query-string values into a TransactionFilter.

    Blank values impose no constraint, except for ``year_month`` whose
    absent/blank distinction is handled by :func:`resolve_year_month`.
    """
    memo_value = (memo or "").strip() or None
    return TransactionFilter(
        category_id=parse_optional_int(category_id, "category_id"),
        payer=_parse_enum(PayerType, payer, "payer"),
        type=_parse_enum(FlowType, flow_type, "type"),
        memo=memo_value,
        year_month=resolve_year_month(year_month, today),
    )


def apply_transaction_filter(stmt: Select, criteria: TransactionFilter) -> Select:
    """Return ``stmt`` narrowed by every criterion that is set."""
    if criteria.category_id is not None:
        stmt = stmt.where(Transaction.category_id == criteria.category_id)
    if criteria.payer is not None:
        stmt = stmt.where(Transaction.payer == criteria.payer)
    if criteria.type is not None:
        stmt = stmt.where(Transaction.type == criteria.type)
    if criteria.memo:
        stmt = stmt.where(Transaction.memo.contains(criteria.memo, autoescape=True))
    if criteria.year_month:
        year, month = parse_year_month(criteria.year_month)
        first_day, next_month = month_bounds(year, month)
        stmt = stmt.where(Transaction.date >= first_day).where(Transaction.date < next_month)
    return stmt


async def list_year_months(db: AsyncSession, today: date) -> list[str]:
    """Months that have at least one transaction, newest first.

    The current month is always included so a month picker can offer it
    before anything has been recorded.
    """
    year_col = extract("year", Transaction.date)
    month_col = extract("month", Transaction.date)
    result = await db.execute(select(year_col, month_col).distinct())
    months = {f"{int(year):04d}-{int(month):02d}" for year, month in result}
    months.add(format_year_month(today))
    return sorted(months, reverse=True)


__all__ = [
    "TransactionFilter",
    "apply_transaction_filter",
    "build_transaction_filter",
    "format_year_month",
    "list_year_months",
    "resolve_year_month",
]
