from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Response

from fintrack.api.deps import get_app_settings, get_tx_repo
from fintrack.api.mappers.transaction_mapper import tx_to_response, tx_to_search_item
from fintrack.api.schemas.search import SearchResponse
from fintrack.api.schemas.transactions import TransactionResponse, TransactionWriteRequest
from fintrack.domain.money import parse_amount
from fintrack.domain.transaction import Transaction
from fintrack.services.transaction_query_service import TransactionQuery, apply_transaction_query, sort_transactions
from fintrack.validation.field_validator import parse_date, validate_transaction

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/transactions", tags=["transactions"])


def _validated_fields(payload: TransactionWriteRequest) -> dict:
    report = validate_transaction(payload.model_dump())
    if not report.is_valid:
        raise HTTPException(status_code=422, detail=report.to_dict())

    return {
        "description": payload.description.strip(),
        "amount": parse_amount(payload.amount),
        "category": payload.category.strip(),
        "date": parse_date(payload.date),
    }


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(payload: TransactionWriteRequest) -> TransactionResponse:
    fields = _validated_fields(payload)
    tx = Transaction.create(**fields)

    try:
        get_tx_repo().add(tx)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    logger.info("Added transaction %s", tx.id)
    return tx_to_response(tx)


@router.get("", response_model=list[TransactionResponse])
def list_transactions(
    sort_by: str = Query(default="date", pattern="^(date|amount|category|description)$"),
    sort_dir: str = Query(default="desc", pattern="^(asc|desc)$"),
) -> list[TransactionResponse]:
    txs = sort_transactions(get_tx_repo().list(), sort_by, sort_dir)  # type: ignore[arg-type]
    return [tx_to_response(t) for t in txs]


@router.get("/search", response_model=SearchResponse)
def search_transactions(
    q: str = Query(default=""),
    mode: str = Query(default="plain", pattern="^(plain|regex)$"),
    field: str = Query(default="all", pattern="^(all|description|category|amount|date)$"),
    sort_by: str = Query(default="date", pattern="^(date|amount|category|description)$"),
    sort_dir: str = Query(default="desc", pattern="^(asc|desc)$"),
    highlight: bool = Query(default=False),
) -> SearchResponse:
    query = TransactionQuery(
        pattern=q,
        mode=mode,          # type: ignore[arg-type]
        field=field,        # type: ignore[arg-type]
        sort_by=sort_by,    # type: ignore[arg-type]
        sort_dir=sort_dir,  # type: ignore[arg-type]
        flags=get_app_settings().search_flags,
    )
    result = apply_transaction_query(get_tx_repo().list(), query)

    logger.debug("Search %r (%s): %s", q, mode, result.stats())
    return SearchResponse(
        items=[
            tx_to_search_item(t, result.matcher, with_highlight=highlight, field=field)
            for t in result.transactions
        ],
        total=result.total,
        matched=result.matched,
        mode=result.mode,
        pattern_valid=result.pattern_valid,
        error=result.error,
        feedback=result.feedback(),
        stats=result.stats(),
    )


@router.get("/{tx_id}", response_model=TransactionResponse)
def get_transaction(tx_id: str) -> TransactionResponse:
    tx = get_tx_repo().get(tx_id)
    if tx is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return tx_to_response(tx)


@router.put("/{tx_id}", response_model=TransactionResponse)
def update_transaction(tx_id: str, payload: TransactionWriteRequest) -> TransactionResponse:
    tx_repo = get_tx_repo()

    existing = tx_repo.get(tx_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Transaction not found")

    fields = _validated_fields(payload)
    try:
        updated = tx_repo.update(existing.with_changes(**fields))
    except KeyError:
        raise HTTPException(status_code=404, detail="Transaction not found")

    logger.info("Updated transaction %s", tx_id)
    return tx_to_response(updated)


@router.delete("/{tx_id}", status_code=204)
def delete_transaction(tx_id: str) -> Response:
    deleted = get_tx_repo().delete(tx_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Transaction not found")

    logger.info("Deleted transaction %s", tx_id)
    return Response(status_code=204)
