from __future__ import annotations

from functools import lru_cache

from fintrack.settings import Settings, get_settings
from fintrack.repositories.in_memory_transaction_repository import InMemoryTransactionRepository


@lru_cache
def get_app_settings() -> Settings:
    return get_settings()


@lru_cache
def get_tx_repo() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()
