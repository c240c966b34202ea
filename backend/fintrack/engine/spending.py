# fintrack/engine/spending.py
from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from collections import defaultdict
from typing import Literal, Optional, Sequence

from fintrack.domain.money import amount_to_str
from fintrack.domain.transaction import Transaction

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

BudgetState = Literal["no_cap", "under", "over"]


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: Decimal


@dataclass(frozen=True)
class DaySpending:
    date: dt.date
    weekday: str
    amount: Decimal


@dataclass(frozen=True)
class WeeklySpending:
    days: list[DaySpending]
    total: Decimal


@dataclass(frozen=True)
class BudgetStatus:
    state: BudgetState
    cap: Decimal
    remaining: Decimal
    message: str


@dataclass(frozen=True)
class SpendingSummary:
    total_records: int
    total_spent: Decimal
    top_category: Optional[str]
    categories: list[CategoryTotal]
    last_7_days: WeeklySpending
    budget: BudgetStatus


def total_spent(txs: Sequence[Transaction]) -> Decimal:
    return sum((t.amount for t in txs), Decimal("0.00"))


def category_totals(txs: Sequence[Transaction]) -> list[CategoryTotal]:
    acc: dict[str, Decimal] = defaultdict(Decimal)
    for t in txs:
        acc[t.category] += t.amount

    out = [CategoryTotal(category=c, total=v) for c, v in acc.items()]
    # plus gros poste en haut, puis nom pour rester déterministe
    out.sort(key=lambda x: (-x.total, x.category.casefold()))
    return out


def top_category(txs: Sequence[Transaction]) -> Optional[str]:
    acc: dict[str, Decimal] = defaultdict(Decimal)
    for t in txs:
        acc[t.category] += t.amount

    # à égalité : la première catégorie rencontrée dans l'ordre des records
    top: Optional[str] = None
    for category, total in acc.items():
        if top is None or total > acc[top]:
            top = category
    return top


def last_7_days(txs: Sequence[Transaction], *, today: dt.date) -> WeeklySpending:
    by_day: dict[dt.date, Decimal] = defaultdict(Decimal)
    for t in txs:
        by_day[t.date] += t.amount

    days = []
    for offset in range(6, -1, -1):
        d = today - dt.timedelta(days=offset)
        days.append(DaySpending(date=d, weekday=_WEEKDAYS[d.weekday()], amount=by_day.get(d, Decimal("0.00"))))

    return WeeklySpending(days=days, total=sum((d.amount for d in days), Decimal("0.00")))


def budget_status(total: Decimal, cap: Decimal) -> BudgetStatus:
    if cap <= 0:
        return BudgetStatus(state="no_cap", cap=cap, remaining=Decimal("0.00"), message="No budget cap set")

    remaining = cap - total
    if remaining >= 0:
        return BudgetStatus(
            state="under",
            cap=cap,
            remaining=remaining,
            message=f"Under limit by {amount_to_str(remaining)}",
        )
    return BudgetStatus(
        state="over",
        cap=cap,
        remaining=remaining,
        message=f"Over limit by {amount_to_str(-remaining)}",
    )


def summarize(txs: Sequence[Transaction], *, today: dt.date, budget_cap: Decimal = Decimal("0")) -> SpendingSummary:
    total = total_spent(txs)
    return SpendingSummary(
        total_records=len(txs),
        total_spent=total,
        top_category=top_category(txs),
        categories=category_totals(txs),
        last_7_days=last_7_days(txs, today=today),
        budget=budget_status(total, budget_cap),
    )
