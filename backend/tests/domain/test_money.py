from decimal import Decimal

import pytest

from fintrack.domain.money import amount_to_str, has_at_most_two_decimals, parse_amount, quantize_amount


def test_parse_amount_accepts_str_int_float_decimal():
    assert parse_amount(" 12.34 ") == Decimal("12.34")
    assert parse_amount(5) == Decimal("5")
    assert parse_amount(5.1) == Decimal("5.1")
    assert parse_amount(Decimal("7.00")) == Decimal("7.00")


@pytest.mark.parametrize("value", ["", "  ", "abc", "1,5", "NaN", "Infinity"])
def test_parse_amount_rejects_invalid_strings(value):
    with pytest.raises(ValueError):
        parse_amount(value)


@pytest.mark.parametrize("value", [None, True, [1]])
def test_parse_amount_rejects_other_types(value):
    with pytest.raises(TypeError):
        parse_amount(value)


def test_quantize_half_up():
    assert quantize_amount(Decimal("1.005")) == Decimal("1.01")
    assert quantize_amount(Decimal("2")) == Decimal("2.00")


def test_two_decimals():
    assert has_at_most_two_decimals(Decimal("1.10"))
    assert has_at_most_two_decimals(Decimal("1.100"))
    assert not has_at_most_two_decimals(Decimal("1.101"))


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1234.50", "1234.5"),
        ("5.00", "5"),
        ("100", "100"),
        ("0.05", "0.05"),
        ("10000000.00", "10000000"),
    ],
)
def test_amount_to_str_is_canonical(value, expected):
    assert amount_to_str(Decimal(value)) == expected


@pytest.mark.parametrize("value", ["1e3", "+5", "5.", ".5", "1 000"])
def test_parse_amount_rejects_non_plain_decimal_strings(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_two_decimals_does_not_overflow():
    assert has_at_most_two_decimals(Decimal("1e30"))
    assert has_at_most_two_decimals(Decimal("123456789012345678901234567890.12"))
    assert not has_at_most_two_decimals(Decimal("123456789012345678901234567890.123"))
