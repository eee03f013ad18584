from datetime import date
from types import SimpleNamespace

from kakeibo.domain.enums import FlowType, PayerType
from kakeibo.services.dashboard import (
    calculate_balance,
    calculate_daily_balances,
    calculate_payer_balances,
    get_monthly_transactions,
    get_transactions_by_date,
    month_bounds,
)


def entry(day, type, amount, payer=PayerType.PERSON_A, month=1):
    return SimpleNamespace(date=date(2026, month, day), type=type, amount=amount, payer=payer)


def test_balance_of_nothing_is_zero():
    assert calculate_balance([]) == {"income": 0, "expense": 0, "balance": 0}


def test_balance_sums_income_and_expense():
    transactions = [
        entry(10, FlowType.INCOME, 50000),
        entry(10, FlowType.EXPENSE, 1000),
    ]

    assert calculate_balance(transactions) == {"income": 50000, "expense": 1000, "balance": 49000}


def test_balance_can_go_negative():
    assert calculate_balance([entry(3, FlowType.EXPENSE, 2500)])["balance"] == -2500


def test_daily_balances_only_contain_days_with_transactions():
    transactions = [
        entry(10, FlowType.INCOME, 50000),
        entry(10, FlowType.EXPENSE, 1000),
        entry(15, FlowType.EXPENSE, 2000, payer=PayerType.PERSON_B),
    ]

    assert calculate_daily_balances(transactions) == {
        10: {"income": 50000, "expense": 1000, "balance": 49000},
        15: {"income": 0, "expense": 2000, "balance": -2000},
    }


def test_daily_balances_of_nothing_is_empty():
    assert calculate_daily_balances([]) == {}


def test_payer_balances_cover_every_payer():
    transactions = [
        entry(1, FlowType.INCOME, 300000, payer=PayerType.PERSON_A),
        entry(2, FlowType.EXPENSE, 80000, payer=PayerType.PERSON_A),
    ]

    balances = calculate_payer_balances(transactions, {"person_a": "Alice", "person_b": "Bob"})

    assert balances == {
        "person_a": {"label": "Alice", "balance": 220000},
        "person_b": {"label": "Bob", "balance": 0},
    }


def test_payer_balances_accept_a_generator():
    transactions = (entry(d, FlowType.EXPENSE, 100, payer=PayerType.PERSON_B) for d in (1, 2))

    balances = calculate_payer_balances(transactions, {})

    assert balances["person_b"] == {"label": "person_b", "balance": -200}
    assert balances["person_a"]["balance"] == 0


def test_month_bounds_rolls_over_december():
    assert month_bounds(2026, 1) == (date(2026, 1, 1), date(2026, 2, 1))
    assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2026, 1, 1))


async def test_monthly_transactions_stay_inside_the_month(db, make_category, make_transaction):
    food = await make_category()
    await make_transaction(food, date(2025, 12, 31), 100)
    first = await make_transaction(food, date(2026, 1, 1), 200)
    last = await make_transaction(food, date(2026, 1, 31), 300)
    await make_transaction(food, date(2026, 2, 1), 400)

    transactions = await get_monthly_transactions(db, 2026, 1)

    assert [t.id for t in transactions] == [first.id, last.id]


async def test_monthly_transactions_for_an_empty_month(db):
    assert await get_monthly_transactions(db, 2030, 6) == []


async def test_transactions_by_date_attach_category(db, make_category, make_transaction):
    food = await make_category("Groceries")
    salary = await make_category("Salary", FlowType.INCOME)
    lunch = await make_transaction(food, date(2026, 1, 10), 1000, memo="lunch")
    pay = await make_transaction(salary, date(2026, 1, 10), 50000)
    await make_transaction(food, date(2026, 1, 11), 700)

    transactions = await get_transactions_by_date(db, date(2026, 1, 10))

    assert [t.id for t in transactions] == [lunch.id, pay.id]
    assert [t.category.name for t in transactions] == ["Groceries", "Salary"]
