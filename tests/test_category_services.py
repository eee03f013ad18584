from datetime import date

import pytest
from fastapi import HTTPException

from kakeibo.domain.categories.services import (
    commit_category_reference,
    count_category_references,
    ensure_category_exists,
)
from kakeibo.domain.enums import FlowType, PayerType
from kakeibo.domain.transactions.models import Transaction


async def test_dangling_category_reference_is_422(db):
    db.add(
        Transaction(
            date=date(2026, 1, 5),
            type=FlowType.EXPENSE,
            category_id=999,
            payer=PayerType.PERSON_A,
            amount=100,
        )
    )

    with pytest.raises(HTTPException) as exc_info:
        await commit_category_reference(db, "transaction")

    assert exc_info.value.status_code == 422


async def test_ensure_category_exists(db, make_category):
    food = await make_category()

    await ensure_category_exists(db, food.id)
    with pytest.raises(HTTPException) as exc_info:
        await ensure_category_exists(db, food.id + 1)

    assert exc_info.value.detail[0]["loc"] == ["body", "category_id"]


async def test_count_category_references(db, make_category, make_transaction, make_rule):
    food = await make_category()
    await make_transaction(food, date(2026, 1, 5), 100)
    await make_transaction(food, date(2026, 1, 6), 100)
    await make_rule(food)

    assert await count_category_references(db, food.id) == (2, 1)
