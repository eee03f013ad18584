"""Materialize monthly transactions from active recurring rules."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.domain.recurring.models import RecurringTransaction
from kakeibo.domain.transactions.models import Transaction
from kakeibo.services.dashboard import month_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Counts reported by one generation run."""

    date: date
    created: int
    skipped: int


async def find_due_rules(db: AsyncSession, target_date: date) -> list[RecurringTransaction]:
    """Active rules whose ``day_of_month`` matches the target day, by id."""
    result = await db.execute(
        select(RecurringTransaction)
        .where(RecurringTransaction.is_active.is_(True))
        .where(RecurringTransaction.day_of_month == target_date.day)
        .order_by(RecurringTransaction.id)
    )
    return list(result.scalars().all())


async def already_generated(db: AsyncSession, rule_id: int, target_date: date) -> bool:
    """True when the rule already produced a transaction in the target month."""
    first_day, next_month = month_bounds(target_date.year, target_date.month)
    result = await db.execute(
        select(Transaction.id)
        .where(Transaction.recurring_transaction_id == rule_id)
        .where(Transaction.date >= first_day)
        .where(Transaction.date < next_month)
        .limit(1)
    )
    return result.first() is not None


def build_transaction(rule: RecurringTransaction, target_date: date) -> Transaction:
    return Transaction(
        date=target_date,
        type=rule.type,
        category_id=rule.category_id,
        payer=rule.payer,
        amount=rule.amount,
        memo=rule.memo,
        recurring_transaction_id=rule.id,
    )


async def generate_recurring_transactions(
    db: AsyncSession,
    target_date: Optional[date] = None,
) -> GenerationResult:
    """Create this month's transaction for every rule due on ``target_date``.

    The run is idempotent: a rule that already has a transaction in the
    target month is skipped. All inserts are committed together; on any
    error the session is rolled back and nothing from this run persists,
    so the job can simply be re-run.
    """
    target_date = target_date or date.today()
    logger.info("Generating recurring transactions for %s (day %s)", target_date.isoformat(), target_date.day)

    created = 0
    skipped = 0
    try:
        rules = await find_due_rules(db, target_date)
        if not rules:
            logger.info("No recurring transactions due on %s", target_date.isoformat())

        for rule in rules:
            if await already_generated(db, rule.id, target_date):
                logger.info("Skipped recurring transaction %r (id=%s): already generated", rule.name, rule.id)
                skipped += 1
                continue

            db.add(build_transaction(rule, target_date))
            logger.info("Generated recurring transaction %r (id=%s)", rule.name, rule.id)
            created += 1

        await db.flush()
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Recurring generation for %s failed; rolled back", target_date.isoformat())
        raise

    logger.info(
        "Recurring generation finished: date=%s created=%s skipped=%s",
        target_date.isoformat(),
        created,
        skipped,
    )
    return GenerationResult(date=target_date, created=created, skipped=skipped)
