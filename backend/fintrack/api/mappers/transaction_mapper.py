from __future__ import annotations

from fintrack.api.schemas.search import SearchItem
from fintrack.api.schemas.transactions import TransactionResponse
from fintrack.domain.money import amount_to_str
from fintrack.domain.transaction import Transaction
from fintrack.search.highlight import highlight
from fintrack.search.pattern_compiler import Matcher


def tx_to_response(tx: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=tx.id,
        description=tx.description,
        amount=amount_to_str(tx.amount),  # même forme que pour la recherche
        category=tx.category,
        date=tx.date,
        created_at=tx.created_at,
        updated_at=tx.updated_at,
    )


def tx_to_search_item(
    tx: Transaction,
    matcher: Matcher | None,
    *,
    with_highlight: bool,
    field: str = "all",
) -> SearchItem:
    base = tx_to_response(tx).model_dump()
    if not with_highlight:
        return SearchItem(**base)

    # on ne surligne que les champs réellement cherchés
    def scoped(name: str) -> Matcher | None:
        return matcher if field in ("all", name) else None

    return SearchItem(
        **base,
        description_html=highlight(tx.description, scoped("description")),
        category_html=highlight(tx.category, scoped("category")),
    )
