"""Import every mapped model so relationships resolve and metadata is complete."""

from kakeibo.domain.categories.models import Category
from kakeibo.domain.recurring.models import RecurringTransaction
from kakeibo.domain.transactions.models import Transaction

__all__ = ["Category", "RecurringTransaction", "Transaction"]
