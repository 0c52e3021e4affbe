"""Invoice totals: subtotal, tax, round-off, grand total and running balance.

All arithmetic is done on :class:`~decimal.Decimal`. The calculator never
raises: bad rows count as zero, and an unexpected fault yields a zeroed
summary flagged as a fallback and logged with its traceback.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from taxinvoice.models.invoice import TotalsResult, TotalsSummary
from taxinvoice.numeric import ZERO, exact_context, line_total, parse_lenient, round2, to_decimal

logger = logging.getLogger(__name__)


def row_value(item, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_amount(item) -> Decimal:
    """``rate × quantity`` of a row; missing or bad values count as 0."""
    return line_total(row_value(item, "rate"), row_value(item, "quantity"))


def calculate_totals(
    items: Optional[Iterable],
    tax_rate_percent=None,
    previous_balance=None,
) -> TotalsResult:
    previous = to_decimal(previous_balance, ZERO)
    try:
        with exact_context():
            subtotal = sum((line_amount(item) for item in items or ()), ZERO)
            tax_rate = to_decimal(tax_rate_percent, ZERO)
            tax_amount = subtotal * tax_rate / Decimal(100)
            raw_total = subtotal + tax_amount
            round_off = round2(raw_total) - raw_total
            grand_total = raw_total + round_off
            summary = TotalsSummary(
                subtotal=subtotal,
                tax_amount=tax_amount,
                round_off=round_off,
                grand_total=grand_total,
                running_balance=previous + grand_total,
            )
    except Exception as exc:  # noqa: BLE001
        logger.exception("Totals calculation failed; using zeroed totals")
        return TotalsResult(
            summary=TotalsSummary(running_balance=previous),
            fallback=True,
            error=f"{type(exc).__name__}: {exc}",
        )
    return TotalsResult(summary=summary)


def compute_totals(
    items: Optional[Iterable],
    tax_rate_percent=None,
    previous_balance=None,
) -> TotalsSummary:
    return calculate_totals(items, tax_rate_percent, previous_balance).summary


def compute_total_quantity(items: Optional[Iterable]) -> Decimal:
    """Display-only sum of quantities; text such as ``"2 Nos"`` counts as 2."""
    return sum((parse_lenient(row_value(item, "quantity")) for item in items or ()), ZERO)
