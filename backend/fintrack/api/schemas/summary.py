from __future__ import annotations

import datetime as dt

from pydantic import BaseModel


class CategoryTotalResponse(BaseModel):
    category: str
    total: str


class DaySpendingResponse(BaseModel):
    date: dt.date
    weekday: str
    amount: str


class BudgetResponse(BaseModel):
    state: str
    cap: str
    remaining: str
    message: str


class SummaryResponse(BaseModel):
    total_records: int
    total_spent: str
    top_category: str | None
    categories: list[CategoryTotalResponse]
    last_7_days: list[DaySpendingResponse]
    last_7_days_total: str
    budget: BudgetResponse
