"""Pydantic schemas for category operations."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from kakeibo.domain.enums import FlowType


class CategoryBase(BaseModel):
    """Shared attributes for category payloads."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    type: FlowType | None = None
    icon: Optional[str] = None
    color: Optional[str] = None

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class CategoryCreate(CategoryBase):
    """Schema for creating a category."""

    name: str = Field(min_length=1, max_length=255)
    type: FlowType


class CategoryUpdate(CategoryBase):
    """Schema for updating a category."""

    pass


class CategoryOut(BaseModel):
    """Schema for returning category data."""

    id: int
    name: str
    type: FlowType
    icon: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryReassignRequest(BaseModel):
    """Schema for moving transactions and recurring rules to another category."""

    new_category_id: int

    model_config = ConfigDict(extra="forbid")
