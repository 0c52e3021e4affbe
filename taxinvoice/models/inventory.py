"""Dataclasses representing catalog records and invoice line items."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from taxinvoice.numeric import ZERO, line_total, to_decimal


@dataclass(frozen=True)
class InventoryRecord:
    """Catalog entry supplied by the item source. Read-only to the invoice."""

    id: str
    name: str
    rate: Decimal
    hsn: str = ""
    unit: str = ""

    def __post_init__(self) -> None:
        rate = to_decimal(self.rate, ZERO)
        object.__setattr__(self, "rate", rate if rate >= 0 else ZERO)


@dataclass(frozen=True)
class LineItem:
    id: str
    record: InventoryRecord
    quantity: Decimal
    discount: Decimal = ZERO

    @property
    def rate(self) -> Decimal:
        return self.record.rate

    @property
    def description(self) -> str:
        return self.record.name

    @property
    def hsn(self) -> str:
        return self.record.hsn

    @property
    def unit(self) -> str:
        return self.record.unit

    @property
    def amount(self) -> Decimal:
        return line_total(self.record.rate, self.quantity)
