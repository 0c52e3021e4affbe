"""Invoice data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from taxinvoice.models.inventory import LineItem
from taxinvoice.numeric import ZERO, format_quantity, line_total


class PaymentTerms(str, Enum):
    IMMEDIATE = "immediate"
    DAYS_15 = "15days"
    DAYS_30 = "30days"
    DAYS_45 = "45days"
    DAYS_60 = "60days"

    @property
    def label(self) -> str:
        if self is PaymentTerms.IMMEDIATE:
            return "Immediate"
        return f"{self.value[:-4]} Days"


class TransportMode(str, Enum):
    ROAD = "road"
    RAIL = "rail"
    AIR = "air"
    SHIP = "ship"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass
class Company:
    """Business profile; used for the seller and for the billed customer."""

    name: str = ""
    address: List[str] = field(default_factory=list)
    gstin: str = ""
    state: str = ""
    state_code: str = ""
    contact: List[str] = field(default_factory=list)
    email: str = ""
    website: str = ""
    pan: str = ""
    place_of_supply: str = ""


@dataclass
class InvoiceMetadata:
    invoice_no: str = ""
    invoice_date: str = ""
    due_date: Optional[str] = None
    e_way_bill_no: Optional[str] = None
    delivery_note: Optional[str] = None
    delivery_note_date: Optional[str] = None
    mode_of_payment: Optional[str] = None
    reference_no: Optional[str] = None
    other_references: Optional[str] = None
    buyer_order_no: Optional[str] = None
    dispatch_doc_no: Optional[str] = None
    dispatched_through: Optional[str] = None
    destination: Optional[str] = None
    bill_of_lading_no: Optional[str] = None
    bill_of_lading_date: Optional[str] = None
    motor_vehicle_no: Optional[str] = None
    terms_of_delivery: Optional[str] = None


@dataclass
class BankDetails:
    account_holder_name: str = ""
    bank_name: str = ""
    account_no: str = ""
    branch_and_ifsc: str = ""
    swift_code: Optional[str] = None


@dataclass
class InvoiceOptions:
    payment_terms: PaymentTerms
    due_date: date
    notes: str = ""
    transport_mode: TransportMode = TransportMode.ROAD
    vehicle_no: str = ""


@dataclass(frozen=True)
class InvoiceRow:
    """One printable row of the items table.

    ``quantity`` is display text and may carry a unit (``"2 Nos"``); the
    amount is always worked out from it and the rate.
    """

    description: str = ""
    quantity: str = ""
    rate: Optional[Decimal] = None
    sl_no: Optional[int] = None
    hsn_sac: str = ""
    unit: str = ""

    @property
    def amount(self) -> Decimal:
        return line_total(self.rate, self.quantity)

    @classmethod
    def from_line_item(cls, item: LineItem, sl_no: Optional[int] = None) -> "InvoiceRow":
        quantity = format_quantity(item.quantity)
        if item.unit:
            quantity = f"{quantity} {item.unit}"
        return cls(
            description=item.description,
            quantity=quantity,
            rate=item.rate,
            sl_no=sl_no,
            hsn_sac=item.hsn,
            unit=item.unit,
        )


@dataclass(frozen=True)
class TotalsSummary:
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    round_off: Decimal = ZERO
    grand_total: Decimal = ZERO
    running_balance: Decimal = ZERO


@dataclass(frozen=True)
class TotalsResult:
    """Totals plus whether they come from the zeroed fallback path."""

    summary: TotalsSummary
    fallback: bool = False
    error: Optional[str] = None
