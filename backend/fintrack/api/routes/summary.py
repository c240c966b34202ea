from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, HTTPException

from fintrack.api.deps import get_app_settings, get_tx_repo
from fintrack.api.schemas.summary import (
    BudgetResponse,
    CategoryTotalResponse,
    DaySpendingResponse,
    SummaryResponse,
)
from fintrack.domain.money import amount_to_str
from fintrack.engine.spending import summarize

logger = logging.getLogger(__name__)
router = APIRouter(tags=["summary"])


@router.get("/summary", response_model=SummaryResponse)
def spending_summary() -> SummaryResponse:
    try:
        txs = get_tx_repo().list()
        s = summarize(txs, today=dt.date.today(), budget_cap=get_app_settings().budget_cap)

        return SummaryResponse(
            total_records=s.total_records,
            total_spent=amount_to_str(s.total_spent),
            top_category=s.top_category,
            categories=[CategoryTotalResponse(category=c.category, total=amount_to_str(c.total)) for c in s.categories],
            last_7_days=[
                DaySpendingResponse(date=d.date, weekday=d.weekday, amount=amount_to_str(d.amount))
                for d in s.last_7_days.days
            ],
            last_7_days_total=amount_to_str(s.last_7_days.total),
            budget=BudgetResponse(
                state=s.budget.state,
                cap=amount_to_str(s.budget.cap),
                remaining=amount_to_str(s.budget.remaining),
                message=s.budget.message,
            ),
        )
    except Exception as e:
        logger.exception("Failed to compute spending summary: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")
