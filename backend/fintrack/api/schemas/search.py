from __future__ import annotations

from pydantic import BaseModel

from fintrack.api.schemas.transactions import TransactionResponse


class SearchItem(TransactionResponse):
    description_html: str | None = None
    category_html: str | None = None


class SearchResponse(BaseModel):
    items: list[SearchItem]
    total: int
    matched: int
    mode: str
    pattern_valid: bool
    error: str | None
    feedback: str
    stats: str


class PatternCheckResponse(BaseModel):
    valid: bool
    error: str | None
