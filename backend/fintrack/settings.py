from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal

from fintrack.domain.money import parse_amount
from fintrack.search.pattern_compiler import parse_flags


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    budget_cap: Decimal = Decimal("0")  # 0 = pas de plafond
    search_flags: str = "i"


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_settings() -> Settings:
    log_level = _env("FINTRACK_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"FINTRACK_LOG_LEVEL: unknown level {log_level!r}")

    budget_cap = parse_amount(_env("FINTRACK_BUDGET_CAP", "0"))
    if budget_cap < 0:
        raise ValueError("FINTRACK_BUDGET_CAP: budget cap cannot be negative")

    search_flags = _env("FINTRACK_SEARCH_FLAGS", "i")
    # fail fast plutôt qu'un motif toujours invalide à l'exécution
    parse_flags(search_flags)

    return Settings(log_level=log_level, budget_cap=budget_cap, search_flags=search_flags)
