# fintrack/services/transaction_query_service.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Sequence

from fintrack.domain.transaction import Transaction
from fintrack.search.transaction_filter import (
    FilterResult,
    QueryDescriptor,
    SearchField,
    SearchMode,
    filter_by_field,
)

SortBy = Literal["date", "amount", "category", "description"]
SortDir = Literal["asc", "desc"]


@dataclass(frozen=True)
class TransactionQuery:
    pattern: str = ""
    mode: SearchMode = "plain"
    field: SearchField = "all"
    sort_by: SortBy = "date"
    sort_dir: SortDir = "desc"  # plus récent d'abord
    flags: str = "i"

    def descriptor(self) -> QueryDescriptor:
        return QueryDescriptor(pattern=self.pattern, mode=self.mode, field=self.field)


def sort_transactions(txs: Sequence[Transaction], sort_by: SortBy = "date", sort_dir: SortDir = "desc") -> list[Transaction]:
    reverse = (sort_dir == "desc")

    def norm_str(s: str | None) -> str:
        return (s or "").casefold()

    # clé primaire selon sort_by, puis tie-breakers (date, created_at, id)
    if sort_by == "date":
        key = lambda t: (t.date, t.created_at, t.id)
    elif sort_by == "amount":
        key = lambda t: (t.amount, t.date, t.created_at, t.id)
    elif sort_by == "category":
        key = lambda t: (norm_str(t.category), t.date, t.created_at, t.id)
    elif sort_by == "description":
        key = lambda t: (norm_str(t.description), t.date, t.created_at, t.id)
    else:
        raise ValueError(f"Unknown sort_by: {sort_by!r}")

    return sorted(txs, key=key, reverse=reverse)


def apply_transaction_query(txs: Sequence[Transaction], q: TransactionQuery) -> FilterResult:
    # -------- filters --------
    result = filter_by_field(txs, q.descriptor(), flags=q.flags)

    # -------- deterministic sort --------
    return replace(result, transactions=sort_transactions(result.transactions, q.sort_by, q.sort_dir))
