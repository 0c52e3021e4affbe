"""Tests for the invoice totals calculator."""

import logging
from decimal import Decimal

import pytest

from taxinvoice.ledger import Ledger
from taxinvoice.models.inventory import InventoryRecord
from taxinvoice.models.invoice import InvoiceRow
from taxinvoice.numeric import round2
from taxinvoice.totals import (
    calculate_totals,
    compute_total_quantity,
    compute_totals,
)


class ExplodingRow:
    """Row whose rate lookup fails unexpectedly."""

    quantity = "1"

    @property
    def rate(self):
        raise RuntimeError("corrupt row")


@pytest.fixture
def two_at_hundred():
    return [InvoiceRow(description="Widget", quantity="2", rate=Decimal("100"))]


class TestComputeTotals:
    """Tests for the numeric summary."""

    def test_reference_example(self, two_at_hundred):
        totals = compute_totals(two_at_hundred, 18)

        assert totals.subtotal == Decimal("200.00")
        assert totals.tax_amount == Decimal("36.00")
        assert totals.grand_total == Decimal("236.00")
        assert totals.round_off == Decimal("0.00")
        assert totals.running_balance == Decimal("236.00")

    def test_running_balance_adds_previous(self, two_at_hundred):
        totals = compute_totals(two_at_hundred, 18, previous_balance=50)

        assert totals.running_balance == Decimal("286.00")

    def test_empty_items(self):
        totals = compute_totals([], 18, previous_balance=Decimal("75.5"))

        assert totals.subtotal == 0
        assert totals.tax_amount == 0
        assert totals.grand_total == 0
        assert totals.running_balance == Decimal("75.5")

    def test_none_items_and_bad_inputs(self):
        totals = compute_totals(None, "abc", previous_balance="n/a")

        assert totals.grand_total == 0
        assert totals.running_balance == 0

    def test_round_off_corrects_to_two_decimals(self):
        rows = [InvoiceRow(quantity="1", rate=Decimal("10.333"))]
        totals = compute_totals(rows, 0)

        assert totals.round_off == Decimal("-0.003")
        assert totals.grand_total == Decimal("10.33")
        assert totals.grand_total == totals.subtotal + totals.tax_amount + totals.round_off

    def test_round_off_half_rounds_away_from_zero(self):
        totals = compute_totals([InvoiceRow(quantity="1", rate=Decimal("0.125"))], 0)

        assert totals.grand_total == Decimal("0.13")

    @pytest.mark.parametrize("amounts, rate", [
        (["19.99", "0.01", "3.333"], "18"),
        (["1234.567"], "12.5"),
        (["0.1", "0.2"], "5"),
    ])
    def test_grand_total_is_idempotent_under_rounding(self, amounts, rate):
        rows = [InvoiceRow(quantity="1", rate=Decimal(a)) for a in amounts]
        totals = compute_totals(rows, rate)

        assert round2(totals.grand_total) == totals.grand_total

    def test_reference_example_from_rate_and_quantity(self):
        totals = compute_totals([{"rate": 100, "quantity": 2}], 18)

        assert totals.subtotal == Decimal("200")
        assert totals.tax_amount == Decimal("36")
        assert totals.grand_total == Decimal("236.00")

    def test_stale_amount_is_ignored(self):
        rows = [{"rate": "100", "quantity": "2", "amount": "999"}]

        assert compute_totals(rows, 0).subtotal == Decimal("200")

    def test_quantity_text_with_unit(self):
        rows = [InvoiceRow(quantity="3 Nos", rate=Decimal("12.50"))]

        assert compute_totals(rows, 0).subtotal == Decimal("37.50")

    def test_bad_row_parts_count_as_zero(self):
        rows = [
            InvoiceRow(quantity="2", rate=Decimal("25")),
            InvoiceRow(quantity="2", rate=None),
            {"rate": "not a number", "quantity": "4"},
            {"rate": "25", "quantity": "abc"},
            {"rate": "25", "quantity": "1"},
        ]
        totals = compute_totals(rows, 0)

        assert totals.subtotal == Decimal("75")

    def test_large_rate_and_quantity_stay_exact(self):
        rows = [{"rate": Decimal("1e27"), "quantity": "1"}, {"rate": "0.01", "quantity": Decimal("1e30")}]

        result = calculate_totals(rows, 18)

        assert result.fallback is False
        assert result.summary.subtotal == Decimal("1e27") + Decimal("1e28")
        assert result.summary.grand_total == Decimal("1.298e28")
        assert result.summary.round_off == 0

    def test_row_amount_is_derived(self):
        row = InvoiceRow(quantity="2 Nos", rate=Decimal("100"))

        assert row.amount == Decimal("200")
        with pytest.raises(TypeError):
            InvoiceRow(quantity="2", rate=Decimal("100"), amount=Decimal("999"))

    def test_subtotal_matches_ledger_amounts(self):
        ledger = Ledger()
        pen = InventoryRecord(id="1", name="Pen", rate=Decimal("12.75"))
        pad = InventoryRecord(id="2", name="Pad", rate=Decimal("40"))
        ledger.add(pen)
        ledger.add(pen)
        line = ledger.add(pad)
        ledger.update_quantity(line.id, 3)

        totals = compute_totals(ledger.items, 18)

        assert totals.subtotal == sum(item.rate * item.quantity for item in ledger.items)
        assert totals.subtotal == Decimal("145.50")


class TestFallback:
    """Tests for the zeroed fallback path."""

    def test_fault_returns_flagged_fallback(self, caplog):
        rows = [InvoiceRow(quantity="1", rate=Decimal("10")), ExplodingRow()]

        with caplog.at_level(logging.ERROR, logger="taxinvoice.totals"):
            result = calculate_totals(rows, 18, previous_balance=40)

        assert result.fallback is True
        assert "corrupt row" in result.error
        assert result.summary.subtotal == 0
        assert result.summary.grand_total == 0
        assert result.summary.running_balance == Decimal("40")
        assert "Totals calculation failed" in caplog.text

    def test_success_is_not_flagged(self, two_at_hundred):
        result = calculate_totals(two_at_hundred, 18)

        assert result.fallback is False
        assert result.error is None

    def test_non_iterable_items_fall_back(self):
        result = calculate_totals(5, 18)

        assert result.fallback is True
        assert result.summary.running_balance == 0


class TestTotalQuantity:
    """Tests for the display-only quantity sum."""

    def test_sums_text_quantities(self):
        rows = [InvoiceRow(quantity="2 Nos"), InvoiceRow(quantity="1.5 Kg"), InvoiceRow(quantity="abc")]

        assert compute_total_quantity(rows) == Decimal("3.5")

    def test_empty(self):
        assert compute_total_quantity([]) == 0
        assert compute_total_quantity(None) == 0
