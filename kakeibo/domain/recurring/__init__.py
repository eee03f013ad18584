"""Recurring rules and the monthly generation job."""

from .services import GenerationResult, generate_recurring_transactions

__all__ = [
    "GenerationResult",
    "generate_recurring_transactions",
]
