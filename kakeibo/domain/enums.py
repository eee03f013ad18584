"""Flow and payer enumerations shared by every domain model."""
from __future__ import annotations

from enum import Enum
from typing import Mapping


class FlowType(str, Enum):
    """Whether money comes in or goes out."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return "Income" if self is FlowType.INCOME else "Expense"


class PayerType(str, Enum):
    """Household member a transaction belongs to."""

    PERSON_A = "person_a"
    PERSON_B = "person_b"


def payer_label(payer: PayerType | str, labels: Mapping[str, str]) -> str:
    """Return the configured display name for ``payer``.

    ``labels`` maps payer codes to names; unknown codes fall back to the code.
    """
    code = PayerType(payer).value
    return labels.get(code) or code


def payer_options(labels: Mapping[str, str]) -> list[dict[str, str]]:
    """Value/label pairs for every payer, in declaration order."""
    return [
        {"value": payer.value, "label": payer_label(payer, labels)}
        for payer in PayerType
    ]


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values (not member names) in string columns."""
    return [member.value for member in enum_cls]


__all__ = ["FlowType", "PayerType", "enum_values", "payer_label", "payer_options"]
