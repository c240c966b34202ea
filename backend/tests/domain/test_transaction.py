import datetime as dt
from decimal import Decimal
import re

import pytest

from fintrack.domain.transaction import Transaction, generate_id


def _create(**overrides) -> Transaction:
    kwargs = dict(
        description=" Morning coffee ",
        amount=Decimal("4.5"),
        category=" Food ",
        date=dt.date(2026, 1, 10),
    )
    kwargs.update(overrides)
    return Transaction.create(**kwargs)


def test_transaction_create_ok():
    tx = _create()

    assert re.fullmatch(r"txn_\d+_[0-9a-z]{9}", tx.id)
    assert tx.description == "Morning coffee"
    assert tx.category == "Food"
    assert tx.amount == Decimal("4.50")
    assert tx.date == dt.date(2026, 1, 10)
    assert tx.created_at.tzinfo is not None  # timezone-aware
    assert tx.updated_at == tx.created_at


def test_generated_ids_are_unique():
    assert len({generate_id() for _ in range(200)}) == 200


def test_transaction_keeps_given_id():
    assert _create(id="txn_custom").id == "txn_custom"


def test_transaction_is_frozen():
    tx = _create()
    with pytest.raises(Exception):
        tx.amount = Decimal("1")  # type: ignore[misc]


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
def test_amount_must_be_positive(amount):
    with pytest.raises(ValueError):
        _create(amount=amount)


def test_amount_must_be_decimal():
    with pytest.raises(ValueError):
        _create(amount=4.5)


def test_description_and_category_cannot_be_empty():
    with pytest.raises(ValueError):
        _create(description="   ")
    with pytest.raises(ValueError):
        _create(category="")


def test_date_must_be_a_plain_date():
    with pytest.raises(ValueError):
        _create(date="2026-01-10")
    with pytest.raises(ValueError):
        _create(date=dt.datetime(2026, 1, 10, 12, 0))


def test_created_at_must_be_timezone_aware():
    with pytest.raises(ValueError):
        _create(created_at=dt.datetime(2026, 1, 10, 12, 0))


def test_with_changes_keeps_identity_and_bumps_updated_at():
    created = dt.datetime(2026, 1, 10, 8, 0, tzinfo=dt.timezone.utc)
    tx = _create(created_at=created)

    edited = tx.with_changes(amount=Decimal("5"), category="Drinks")

    assert edited.id == tx.id
    assert edited.created_at == created
    assert edited.updated_at > created
    assert edited.amount == Decimal("5.00")
    assert edited.category == "Drinks"
    assert edited.description == tx.description
    # l'original n'est pas modifié
    assert tx.category == "Food"
