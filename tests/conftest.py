import os
import tempfile
from datetime import date

# Settings are read at import time; point them at throwaway locations first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENV"] = "test"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "kakeibo-test-logs")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from kakeibo.core.database import Base, build_engine, get_db
from kakeibo.domain.categories.models import Category
from kakeibo.domain.enums import FlowType, PayerType
from kakeibo.domain.recurring.models import RecurringTransaction
from kakeibo.domain.transactions.models import Transaction
from kakeibo.web.dependencies import get_payer_labels, get_today

TEST_LABELS = {"person_a": "Alice", "person_b": "Bob"}
TODAY = date(2026, 1, 20)


@pytest_asyncio.fixture
async def engine():
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payer_labels] = lambda: dict(TEST_LABELS)
    app.dependency_overrides[get_today] = lambda: TODAY

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_category(db):
    async def _make(name="Groceries", type=FlowType.EXPENSE):
        category = Category(name=name, type=type)
        db.add(category)
        await db.commit()
        return category

    return _make


@pytest.fixture
def make_transaction(db):
    async def _make(category, on, amount, type=None, payer=PayerType.PERSON_A, memo=None, rule=None):
        transaction = Transaction(
            date=on,
            type=type or category.type,
            category_id=category.id,
            payer=payer,
            amount=amount,
            memo=memo,
            recurring_transaction_id=rule.id if rule else None,
        )
        db.add(transaction)
        await db.commit()
        return transaction

    return _make


@pytest.fixture
def make_rule(db):
    async def _make(category, day_of_month=15, amount=80000, name="Rent", **kwargs):
        rule = RecurringTransaction(
            name=name,
            day_of_month=day_of_month,
            type=kwargs.pop("type", FlowType.EXPENSE),
            category_id=category.id,
            payer=kwargs.pop("payer", PayerType.PERSON_A),
            amount=amount,
            memo=kwargs.pop("memo", None),
            is_active=kwargs.pop("is_active", True),
        )
        db.add(rule)
        await db.commit()
        return rule

    return _make
