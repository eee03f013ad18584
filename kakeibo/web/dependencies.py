"""Request-scoped dependencies that keep routes free of ambient state."""
from __future__ import annotations

from datetime import date

from kakeibo.core.config import settings


def get_payer_labels() -> dict[str, str]:
    """Payer display names from configuration, handed to the aggregators explicitly."""
    return dict(settings.payer_labels)


def get_today() -> date:
    return date.today()
