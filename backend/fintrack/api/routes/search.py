from __future__ import annotations

from fastapi import APIRouter, Query

from fintrack.api.schemas.search import PatternCheckResponse
from fintrack.search.pattern_compiler import is_valid_pattern

router = APIRouter(prefix="/search", tags=["search"])


@router.get("/pattern-check", response_model=PatternCheckResponse)
def pattern_check(pattern: str = Query(default="")) -> PatternCheckResponse:
    check = is_valid_pattern(pattern)
    return PatternCheckResponse(valid=check.valid, error=check.error)
