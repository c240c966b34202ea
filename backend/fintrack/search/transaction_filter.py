# fintrack/search/transaction_filter.py
from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable, Literal, Optional, Sequence

from fintrack.domain.money import amount_to_str
from fintrack.domain.transaction import Transaction
from fintrack.search.pattern_compiler import Compiled, InvalidReason, Matcher, compile_pattern

SearchMode = Literal["plain", "regex"]
SearchField = Literal["all", "description", "category", "amount", "date"]

SEARCH_MODES: tuple[str, ...] = ("plain", "regex")
SEARCH_FIELDS: tuple[str, ...] = ("all", "description", "category", "amount", "date")

# "all" = ces 4 champs ; l'id n'est jamais cherché
SEARCHABLE_FIELDS: tuple[str, ...] = ("description", "category", "amount", "date")

INVALID_PATTERN_FEEDBACK = "Invalid regex pattern"

_METACHARS = re.compile(r"[.*+?^${}()|\[\]\\]")

_FIELD_GETTERS: dict[str, Callable[[Transaction], str]] = {
    "description": lambda t: t.description,
    "category": lambda t: t.category,
    "amount": lambda t: amount_to_str(t.amount),
    "date": lambda t: t.date.isoformat(),
}


@dataclass(frozen=True)
class QueryDescriptor:
    pattern: str = ""
    mode: SearchMode = "plain"
    field: SearchField = "all"

    def __post_init__(self) -> None:
        if self.mode not in SEARCH_MODES:
            raise ValueError(f"Unknown search mode: {self.mode!r}")
        if self.field not in SEARCH_FIELDS:
            raise ValueError(f"Unknown search field: {self.field!r}")


@dataclass(frozen=True)
class FilterResult:
    transactions: Sequence[Transaction]
    total: int
    mode: SearchMode = "plain"
    pattern_valid: bool = True
    error: Optional[str] = None
    matcher: Optional[Matcher] = None

    @property
    def matched(self) -> int:
        return len(self.transactions)

    def feedback(self) -> str:
        if not self.pattern_valid:
            return INVALID_PATTERN_FEEDBACK
        label = "Regex search" if self.mode == "regex" else "Text search"
        plural = "" if self.matched == 1 else "s"
        return f"{label}: {self.matched} transaction{plural} matched"

    def stats(self) -> str:
        return f"Showing {self.matched} of {self.total} transactions"


def escape_pattern(query: str) -> str:
    """Échappe . * + ? ^ $ { } ( ) | [ ] \\ pour une recherche littérale."""
    return _METACHARS.sub(lambda m: "\\" + m.group(0), query)


def field_value(tx: Transaction, field: str) -> str:
    try:
        getter = _FIELD_GETTERS[field]
    except KeyError:
        raise ValueError(f"Unknown search field: {field!r}") from None
    return getter(tx)


def plain_matcher(query: Optional[str]) -> Optional[Matcher]:
    if query is None or not query.strip():
        return None
    # ne peut pas échouer : tout est échappé
    return Matcher(re.compile(escape_pattern(query.strip()), re.IGNORECASE))


def _matching(txs: Sequence[Transaction], matcher: Matcher, fields: Sequence[str]) -> list[Transaction]:
    return [t for t in txs if any(matcher.test(field_value(t, f)) for f in fields)]


def _fields_for(field: str) -> tuple[str, ...]:
    return SEARCHABLE_FIELDS if field == "all" else (field,)


def _plain(txs: Sequence[Transaction], query: Optional[str], field: str) -> FilterResult:
    matcher = plain_matcher(query)
    if matcher is None:
        return FilterResult(transactions=txs, total=len(txs), mode="plain")
    return FilterResult(
        transactions=_matching(txs, matcher, _fields_for(field)),
        total=len(txs),
        mode="plain",
        matcher=matcher,
    )


def _regex(txs: Sequence[Transaction], query: Optional[str], field: str, flags: str) -> FilterResult:
    compiled = compile_pattern(query, flags)

    if not isinstance(compiled, Compiled):
        # pas de motif = tout passe ; motif cassé = tout passe aussi, mais signalé
        malformed = compiled.reason == InvalidReason.MALFORMED
        return FilterResult(
            transactions=txs,
            total=len(txs),
            mode="regex",
            pattern_valid=not malformed,
            error=compiled.message if malformed else None,
        )

    return FilterResult(
        transactions=_matching(txs, compiled.matcher, _fields_for(field)),
        total=len(txs),
        mode="regex",
        matcher=compiled.matcher,
    )


def filter_plain(transactions: Sequence[Transaction], query: Optional[str]) -> Sequence[Transaction]:
    return _plain(transactions, query, "all").transactions


def filter_regex(transactions: Sequence[Transaction], query: Optional[str], flags: str = "i") -> FilterResult:
    return _regex(transactions, query, "all", flags)


def filter_by_field(
    transactions: Sequence[Transaction],
    query: QueryDescriptor,
    flags: str = "i",
) -> FilterResult:
    if query.mode == "regex":
        return _regex(transactions, query.pattern, query.field, flags)
    return _plain(transactions, query.pattern, query.field)
