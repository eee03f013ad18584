"""Pydantic schemas for transaction payloads and list responses."""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from kakeibo.domain.categories.schemas import CategoryOut
from kakeibo.domain.enums import FlowType, PayerType


class TransactionBase(BaseModel):
    """Shared attributes for transaction payloads."""

    date: dt.date | None = None
    type: FlowType | None = None
    category_id: int | None = None
    payer: PayerType | None = None
    amount: int | None = Field(default=None, ge=1)
    memo: Optional[str] = Field(default=None, max_length=255)

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class TransactionCreate(TransactionBase):
    """Schema for creating a transaction."""

    date: dt.date
    type: FlowType
    category_id: int
    payer: PayerType
    amount: int = Field(ge=1)


class TransactionUpdate(TransactionBase):
    """Schema for updating a transaction; only sent fields change."""

    pass


class TransactionOut(BaseModel):
    """Schema for returning a transaction with its category."""

    id: int
    date: dt.date
    type: FlowType
    category_id: int
    payer: PayerType
    amount: int
    memo: Optional[str] = None
    recurring_transaction_id: Optional[int] = None
    category: Optional[CategoryOut] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionSummary(BaseModel):
    """Income/expense totals over a filtered transaction list."""

    income: int
    expense: int
    balance: int


class TransactionFilterEcho(BaseModel):
    """The filters that produced a list response, as applied."""

    category_id: Optional[int] = None
    payer: Optional[PayerType] = None
    type: Optional[FlowType] = None
    memo: Optional[str] = None
    year_month: Optional[str] = None


class PayerOption(BaseModel):
    value: PayerType
    label: str


class TransactionListResponse(BaseModel):
    """Response body for the filtered transaction list."""

    transactions: list[TransactionOut]
    filters: TransactionFilterEcho
    summary: TransactionSummary
    yearMonths: list[str]
    categories: list[CategoryOut]
    payers: list[PayerOption]
