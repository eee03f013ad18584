"""Pydantic schemas for recurring transaction rules."""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from kakeibo.domain.categories.schemas import CategoryOut
from kakeibo.domain.enums import FlowType, PayerType
from kakeibo.domain.recurring.models import MAX_DAY_OF_MONTH, MIN_DAY_OF_MONTH


class RecurringTransactionBase(BaseModel):
    """Shared attributes for recurring rule payloads."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    day_of_month: int | None = Field(default=None, ge=MIN_DAY_OF_MONTH, le=MAX_DAY_OF_MONTH)
    type: FlowType | None = None
    category_id: int | None = None
    payer: PayerType | None = None
    amount: int | None = Field(default=None, ge=1)
    memo: Optional[str] = Field(default=None, max_length=255)
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class RecurringTransactionCreate(RecurringTransactionBase):
    """Schema for creating a recurring rule."""

    name: str = Field(min_length=1, max_length=255)
    day_of_month: int = Field(ge=MIN_DAY_OF_MONTH, le=MAX_DAY_OF_MONTH)
    type: FlowType
    category_id: int
    payer: PayerType
    amount: int = Field(ge=1)
    is_active: bool = True


class RecurringTransactionUpdate(RecurringTransactionBase):
    """Schema for updating a recurring rule."""

    pass


class RecurringTransactionOut(BaseModel):
    """Schema for returning a recurring rule with its category."""

    id: int
    name: str
    day_of_month: int
    type: FlowType
    category_id: int
    payer: PayerType
    amount: int
    memo: Optional[str] = None
    is_active: bool
    category: Optional[CategoryOut] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GenerationResponse(BaseModel):
    """Outcome of one recurring generation run."""

    date: dt.date
    created: int
    skipped: int
