from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
import secrets
import string
import time
from decimal import Decimal
from typing import Optional

from fintrack.domain.money import quantize_amount

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """Identifiant opaque : txn_<epoch ms>_<9 caractères base36>."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"txn_{int(time.time() * 1000)}_{suffix}"


def _utc(value: Optional[dt.datetime], field_name: str) -> dt.datetime:
    if value is None:
        return dt.datetime.now(dt.timezone.utc)
    if not isinstance(value, dt.datetime):
        raise ValueError(f"{field_name} must be a datetime")
    if value.tzinfo is None:
        raise ValueError(f"{field_name} must be timezone-aware (UTC recommended)")
    return value.astimezone(dt.timezone.utc)


def _norm_text(value: object, field_name: str) -> str:
    if not isinstance(value, str) or value.strip() == "":
        raise ValueError(f"{field_name} cannot be empty")
    return value.strip()


@dataclass(frozen=True)
class Transaction:
    id: str
    description: str
    amount: Decimal
    category: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime

    @staticmethod
    def create(
        *,
        description: str,
        amount: Decimal,
        category: str,
        date: dt.date,
        id: Optional[str] = None,
        created_at: Optional[dt.datetime] = None,
        updated_at: Optional[dt.datetime] = None,
    ) -> "Transaction":
        norm_description = _norm_text(description, "description")
        norm_category = _norm_text(category, "category")

        if not isinstance(amount, Decimal):
            raise ValueError("amount must be a Decimal")
        if not (amount > 0):
            raise ValueError("Transaction amount must be positive")

        # datetime hérite de date : on refuse pour garder une date calendaire pure
        if not isinstance(date, dt.date) or isinstance(date, dt.datetime):
            raise ValueError("date must be a date")

        if id is not None and (not isinstance(id, str) or id.strip() == ""):
            raise ValueError("id cannot be empty if provided")

        final_created_at = _utc(created_at, "created_at")
        final_updated_at = final_created_at if updated_at is None else _utc(updated_at, "updated_at")

        return Transaction(
            id=id or generate_id(),
            description=norm_description,
            amount=quantize_amount(amount),
            category=norm_category,
            date=date,
            created_at=final_created_at,
            updated_at=final_updated_at,
        )

    def with_changes(
        self,
        *,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        date: Optional[dt.date] = None,
        updated_at: Optional[dt.datetime] = None,
    ) -> "Transaction":
        """Copie éditée : id et created_at conservés, updated_at rafraîchi."""
        return Transaction.create(
            id=self.id,
            description=self.description if description is None else description,
            amount=self.amount if amount is None else amount,
            category=self.category if category is None else category,
            date=self.date if date is None else date,
            created_at=self.created_at,
            updated_at=updated_at or dt.datetime.now(dt.timezone.utc),
        )
