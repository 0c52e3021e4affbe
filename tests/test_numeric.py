"""Tests for the lenient numeric helpers."""

from decimal import Decimal

import pytest

from taxinvoice.numeric import (
    coerce_quantity,
    format_currency,
    format_quantity,
    line_total,
    parse_lenient,
    round2,
    to_decimal,
)


class TestToDecimal:
    """Tests for strict Decimal coercion."""

    @pytest.mark.parametrize("value, expected", [
        (3, Decimal("3")),
        (2.5, Decimal("2.5")),
        ("10.25", Decimal("10.25")),
        (Decimal("7"), Decimal("7")),
    ])
    def test_numeric_values(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", [None, "", "  ", "abc", True, float("nan"), float("inf"), [1]])
    def test_invalid_values_use_default(self, value):
        assert to_decimal(value) is None
        assert to_decimal(value, Decimal("0")) == Decimal("0")


class TestParseLenient:
    """Tests for parsing numbers out of free text."""

    def test_strips_unit_suffix(self):
        assert parse_lenient("12 Nos") == Decimal("12")

    def test_reads_leading_number_only(self):
        assert parse_lenient("1.5.2") == Decimal("1.5")

    def test_negative_number(self):
        assert parse_lenient("-3 kg") == Decimal("-3")

    def test_unparsable_is_zero(self):
        assert parse_lenient("n/a") == Decimal("0")
        assert parse_lenient(None) == Decimal("0")

    def test_custom_default(self):
        assert parse_lenient("", default=Decimal("5")) == Decimal("5")


class TestCoerceQuantity:
    """Tests for quantity coercion."""

    @pytest.mark.parametrize("value", [-5, 0, float("nan"), "abc", None, "", True])
    def test_invalid_becomes_one(self, value):
        assert coerce_quantity(value) == Decimal("1")

    def test_integral_float_is_normalised(self):
        assert str(coerce_quantity(3.0)) == "3"

    def test_fractional_kept(self):
        assert coerce_quantity("2.5") == Decimal("2.5")

    def test_large_integral_quantity(self):
        assert coerce_quantity("1e30") == Decimal("1e30")
        assert str(coerce_quantity("1e30")) == "1" + "0" * 30


class TestLineTotal:
    """Tests for rate times quantity."""

    def test_text_quantity(self):
        assert line_total(Decimal("12.50"), "3 Nos") == Decimal("37.50")

    @pytest.mark.parametrize("rate, quantity", [(None, "2"), ("abc", "2"), ("10", None), ("10", "n/a")])
    def test_bad_part_is_zero(self, rate, quantity):
        assert line_total(rate, quantity) == 0

    def test_large_values_are_exact(self):
        assert line_total(Decimal("1e27"), "1.5") == Decimal("1.5e27")
        assert line_total("123456789012345678901234567.89", 3) == Decimal("370370367037037036703703703.67")


class TestFormatting:
    """Tests for rounding and display formatting."""

    def test_round_half_away_from_zero(self):
        assert round2(Decimal("2.345")) == Decimal("2.35")
        assert round2(Decimal("-2.345")) == Decimal("-2.35")

    def test_format_currency(self):
        assert format_currency(Decimal("236")) == "₹236.00"
        assert format_currency(Decimal("0.005")) == "₹0.01"

    def test_format_currency_negative_sign_before_symbol(self):
        assert format_currency(Decimal("-0.01")) == "-₹0.01"

    def test_format_currency_invalid_is_zero(self):
        assert format_currency(None) == "₹0.00"

    def test_format_quantity(self):
        assert format_quantity(Decimal("2.0")) == "2"
        assert format_quantity(Decimal("2.50")) == "2.5"

    def test_large_values_format(self):
        assert round2(Decimal("1e27")) == Decimal("1e27")
        assert format_currency(Decimal("1e27")) == "₹1000000000000000000000000000.00"
        assert format_currency(Decimal("-1e27")) == "-₹1000000000000000000000000000.00"
        assert format_quantity(Decimal("1e30")) == "1" + "0" * 30
        assert format_quantity(Decimal("1" + "0" * 30 + ".5")) == "1" + "0" * 30 + ".5"
