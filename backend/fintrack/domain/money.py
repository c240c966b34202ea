from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

_QUANT = Decimal("0.01")

# décimal simple : pas d'exposant, pas de "+", pas de séparateur de milliers
_AMOUNT_TEXT = re.compile(r"-?\d+(?:\.\d+)?")


def parse_amount(value: object) -> Decimal:
    """
    Parse robuste d'un montant.
    Autorise Decimal, int, float et les strings "12.34", "-12.34", "12".
    Les floats passent par leur repr ("5.1" et non 5.0999999...).
    """
    if isinstance(value, bool):
        raise TypeError("Amount cannot be a boolean")

    if isinstance(value, Decimal):
        dec = value
    elif isinstance(value, int):
        dec = Decimal(value)
    elif isinstance(value, float):
        dec = Decimal(repr(value))
    elif isinstance(value, str):
        raw = value.strip()
        if raw == "":
            raise ValueError("Amount cannot be empty")
        if not _AMOUNT_TEXT.fullmatch(raw):
            raise ValueError(f"Invalid decimal amount: {value!r}")
        try:
            dec = Decimal(raw)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal amount: {value!r}") from exc
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    # NaN / Infinity ne sont pas des montants
    if not dec.is_finite():
        raise ValueError(f"Invalid decimal amount: {value!r}")
    return dec


def quantize_amount(amount: Decimal) -> Decimal:
    # Arrondi comptable classique
    return amount.quantize(_QUANT, rounding=ROUND_HALF_UP)


def has_at_most_two_decimals(amount: Decimal) -> bool:
    # via as_tuple : quantize lève InvalidOperation au-delà de 28 chiffres
    _, digits, exponent = amount.as_tuple()
    if not isinstance(exponent, int):
        return False
    excess = -exponent - 2
    if excess <= 0:
        return True
    # les décimales au-delà de la 2e doivent toutes être des zéros
    return all(d == 0 for d in digits[-excess:])


def amount_to_str(amount: Decimal) -> str:
    """
    Forme canonique d'un montant, utilisée pour la recherche ET l'affichage :
    pas d'exposant, pas de zéros inutiles. Decimal("1234.50") -> "1234.5".
    """
    text = format(amount.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
