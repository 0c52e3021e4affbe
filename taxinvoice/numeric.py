"""Decimal helpers shared by the ledger, the totals and the renderer.

Every money figure goes through :func:`round2`, which rounds half away from
zero (``ROUND_HALF_UP`` on :class:`~decimal.Decimal`). The calculator and the
display formatting both use it, so the printed grand total can never differ
from the computed one.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Iterator, Optional

from taxinvoice import config

CENT = Decimal("0.01")
ZERO = Decimal("0")
ONE = Decimal("1")

# Significant digits kept by invoice arithmetic; far above any real figure.
MONEY_PRECISION = 100

_NON_NUMERIC = re.compile(r"[^\d.-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


@contextmanager
def exact_context() -> Iterator[None]:
    """Run Decimal arithmetic without rounding away digits of large figures."""
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        yield


def _quantize(value: Decimal, exponent: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def to_decimal(value, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Strictly convert ``value`` to a finite Decimal, else return ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return default
    if not result.is_finite():
        return default
    return result


def parse_lenient(value, default: Decimal = ZERO) -> Decimal:
    """Read a number out of free text such as ``"12 Nos"``.

    Characters other than digits, ``.`` and ``-`` are dropped and the leading
    numeric prefix of what remains is used. Anything unparsable gives
    ``default`` (0).
    """
    strict = to_decimal(value)
    if strict is not None:
        return strict
    if value is None or isinstance(value, bool):
        return default
    cleaned = _NON_NUMERIC.sub("", str(value))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return default
    return to_decimal(match.group(0), default)


def coerce_quantity(value) -> Decimal:
    """Return a positive finite quantity, substituting 1 for anything else."""
    quantity = to_decimal(value)
    if quantity is None or quantity <= 0:
        return ONE
    if quantity == quantity.to_integral_value():
        return _quantize(quantity, ONE)
    return quantity


def line_total(rate, quantity) -> Decimal:
    """``rate × quantity``; a missing or unreadable part counts as 0."""
    with exact_context():
        return to_decimal(rate, ZERO) * parse_lenient(quantity)


def round2(value: Decimal) -> Decimal:
    return _quantize(value, CENT)


def format_currency(amount) -> str:
    """Return amount with the currency symbol and exactly two decimals."""
    value = round2(to_decimal(amount, ZERO))
    sign = "-" if value < 0 else ""
    return f"{sign}{config.CURRENCY_SYMBOL}{value.copy_abs():.2f}"


def format_quantity(value) -> str:
    quantity = to_decimal(value, ZERO)
    if quantity == quantity.to_integral_value():
        return str(_quantize(quantity, ONE))
    with exact_context():
        return f"{quantity.normalize():f}"


def format_percent(value) -> str:
    """``Decimal("18.00")`` -> ``"18"``, ``Decimal("2.50")`` -> ``"2.5"``."""
    return format_quantity(value)
