from __future__ import annotations

import datetime as dt
from typing import Union

from pydantic import BaseModel, Field


class TransactionWriteRequest(BaseModel):
    # volontairement permissif : les règles métier sont dans le FieldValidator
    description: str | None = None
    amount: Union[str, int, float, None] = Field(
        default=None,
        examples=["12.5", 1000],
        description="Positive amount, at most 2 decimals",
    )
    category: str | None = None
    date: str | None = Field(default=None, examples=["2026-01-10"])


class TransactionResponse(BaseModel):
    id: str
    description: str
    amount: str
    category: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class ValidationErrorResponse(BaseModel):
    is_valid: bool
    errors: dict[str, list[str]]
