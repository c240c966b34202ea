"""
Validation champ par champ d'une transaction candidate.

Chaque validateur renvoie une liste de messages (vide = champ valide) et ne
lève jamais : l'appelant affiche les erreurs à côté des champs du formulaire.

Politique retenue pour la description : obligatoire, au moins 2 caractères
après strip, pas de mot répété deux fois de suite ("Coffee coffee").
"""
from __future__ import annotations

from dataclasses import dataclass, field
import datetime as dt
from decimal import Decimal
import re
from collections.abc import Mapping
from typing import Optional

from fintrack.domain.money import has_at_most_two_decimals, parse_amount

MAX_AMOUNT = Decimal("10000000")
MIN_DESCRIPTION_LENGTH = 2

DUPLICATE_WORDS = re.compile(r"\b(\w+)\s+\1\b", re.IGNORECASE)
CATEGORY = re.compile(r"[A-Za-z]+(?:[ -][A-Za-z]+)*")
DATE = re.compile(r"\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])")


@dataclass(frozen=True)
class ValidationReport:
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return all(len(msgs) == 0 for msgs in self.errors.values())

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": {k: list(v) for k, v in self.errors.items()}}


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def validate_description(description: object) -> list[str]:
    errors: list[str] = []

    if _is_blank(description):
        errors.append("Description is required")
    elif not isinstance(description, str):
        errors.append("Description must be text")
    elif len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        errors.append(f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters")
    elif DUPLICATE_WORDS.search(description):
        errors.append("Description contains duplicate words")

    return errors


def validate_amount(amount: object) -> list[str]:
    errors: list[str] = []

    # 0 n'est pas "absent" : il tombe sur la règle > 0 plus bas
    if _is_blank(amount):
        errors.append("Amount is required")
        return errors

    try:
        value = parse_amount(amount)
    except (TypeError, ValueError):
        errors.append("Amount must be a valid number")
        return errors

    if value < 0:
        errors.append("Amount cannot be negative")
    elif value == 0:
        errors.append("Amount must be greater than 0")
    elif value > MAX_AMOUNT:
        errors.append(f"Amount cannot exceed {MAX_AMOUNT:,}")
    elif not has_at_most_two_decimals(value):
        errors.append("Amount cannot have more than 2 decimal places")

    return errors


def validate_category(category: object) -> list[str]:
    errors: list[str] = []

    if _is_blank(category):
        errors.append("Category is required")
    elif not isinstance(category, str) or not CATEGORY.fullmatch(category):
        errors.append("Category can only contain letters, spaces, and hyphens")

    return errors


def parse_date(value: object) -> Optional[dt.date]:
    """YYYY-MM-DD (ou date) -> date ; None si invalide."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not DATE.fullmatch(value):
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        return None


def validate_date(date: object, *, today: Optional[dt.date] = None) -> list[str]:
    errors: list[str] = []

    if _is_blank(date):
        errors.append("Date is required")
        return errors

    if isinstance(date, str) and not DATE.fullmatch(date):
        errors.append("Date must be in YYYY-MM-DD format")
        return errors

    parsed = parse_date(date)
    if parsed is None:
        errors.append("Date must be a real calendar date")
        return errors

    # comparaison à 23:59:59.999 du jour local : aujourd'hui est toujours accepté
    limit = today or dt.date.today()
    if parsed > limit:
        errors.append("Date cannot be in the future")

    return errors


def _get(candidate: object, name: str) -> object:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def validate_transaction(candidate: object, *, today: Optional[dt.date] = None) -> ValidationReport:
    # pas de court-circuit : les 4 champs sont toujours évalués
    return ValidationReport(
        errors={
            "description": validate_description(_get(candidate, "description")),
            "amount": validate_amount(_get(candidate, "amount")),
            "category": validate_category(_get(candidate, "category")),
            "date": validate_date(_get(candidate, "date"), today=today),
        }
    )
