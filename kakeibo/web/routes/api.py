"""JSON API router."""
from __future__ import annotations

from fastapi import APIRouter

from kakeibo.web.routes import api_categories
from kakeibo.web.routes import api_dashboard
from kakeibo.web.routes import api_recurring
from kakeibo.web.routes import api_transactions

router = APIRouter()

router.include_router(api_dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(api_categories.router, prefix="/categories", tags=["categories"])
router.include_router(api_transactions.router, prefix="/transactions", tags=["transactions"])
router.include_router(api_recurring.router, prefix="/recurring-transactions", tags=["recurring"])
