from datetime import date

from sqlalchemy import select

from kakeibo.domain.enums import FlowType
from kakeibo.domain.recurring.models import RecurringTransaction
from kakeibo.domain.transactions.models import Transaction


async def test_create_and_list_categories(client):
    response = await client.post(
        "/api/categories",
        json={"name": "  Utilities ", "type": "expense", "icon": "bolt", "color": "#ffaa00"},
    )

    assert response.status_code == 201
    assert response.json()["name"] == "Utilities"

    listed = (await client.get("/api/categories")).json()
    assert [c["name"] for c in listed] == ["Utilities"]


async def test_duplicate_category_name_conflicts(client, make_category):
    await make_category("Groceries")

    response = await client.post("/api/categories", json={"name": "Groceries", "type": "expense"})

    assert response.status_code == 409


async def test_create_requires_valid_type(client):
    response = await client.post("/api/categories", json={"name": "Gifts", "type": "transfer"})

    assert response.status_code == 422


async def test_update_category(client, make_category):
    category = await make_category("Groceries")

    response = await client.put(f"/api/categories/{category.id}", json={"name": "Food", "color": "#00ff00"})

    assert response.status_code == 200
    assert response.json()["name"] == "Food"
    assert response.json()["type"] == "expense"


async def test_update_to_existing_name_conflicts(client, make_category):
    await make_category("Groceries")
    dining = await make_category("Dining")

    response = await client.put(f"/api/categories/{dining.id}", json={"name": "Groceries"})

    assert response.status_code == 409


async def test_delete_unused_category(client, make_category):
    category = await make_category("Unused")

    response = await client.delete(f"/api/categories/{category.id}")

    assert response.status_code == 204
    assert (await client.get("/api/categories")).json() == []


async def test_delete_referenced_category_conflicts(client, make_category, make_transaction, make_rule):
    food = await make_category("Groceries")
    await make_transaction(food, date(2026, 1, 5), 100)
    await make_rule(food, day_of_month=3)

    response = await client.delete(f"/api/categories/{food.id}")

    assert response.status_code == 409
    assert "1 transaction(s)" in response.json()["detail"]
    assert "1 recurring rule(s)" in response.json()["detail"]


async def test_reassign_then_delete(client, session_factory, make_category, make_transaction, make_rule):
    old = await make_category("Eating out")
    new = await make_category("Dining")
    await make_transaction(old, date(2026, 1, 5), 100)
    await make_transaction(old, date(2026, 1, 6), 200)
    await make_rule(old, day_of_month=3)

    response = await client.post(f"/api/categories/{old.id}/reassign", json={"new_category_id": new.id})

    assert response.status_code == 200
    assert response.json() == {"moved": 2, "movedRules": 1}

    async with session_factory() as session:
        tx_categories = (await session.execute(select(Transaction.category_id))).scalars().all()
        rule_categories = (await session.execute(select(RecurringTransaction.category_id))).scalars().all()
    assert set(tx_categories) == {new.id}
    assert set(rule_categories) == {new.id}

    assert (await client.delete(f"/api/categories/{old.id}")).status_code == 204


async def test_reassign_to_missing_category_is_404(client, make_category):
    food = await make_category("Groceries")

    response = await client.post(f"/api/categories/{food.id}/reassign", json={"new_category_id": 999})

    assert response.status_code == 404


async def test_reassign_to_itself_moves_nothing(client, make_category, make_transaction):
    food = await make_category("Groceries")
    await make_transaction(food, date(2026, 1, 5), 100)

    response = await client.post(f"/api/categories/{food.id}/reassign", json={"new_category_id": food.id})

    assert response.json() == {"moved": 0, "movedRules": 0}


async def test_categories_are_grouped_by_type(client, make_category):
    await make_category("Groceries", FlowType.EXPENSE)
    await make_category("Salary", FlowType.INCOME)
    await make_category("Rent", FlowType.EXPENSE)

    listed = (await client.get("/api/categories")).json()

    assert [c["type"] for c in listed] == ["expense", "expense", "income"]
