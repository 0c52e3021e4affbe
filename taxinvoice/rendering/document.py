"""Fixed-section document model of a tax invoice.

:func:`render_invoice` maps the seller, buyer, metadata, rows and totals to an
:class:`InvoiceDocument`: an ordered tuple of :class:`Section` objects that the
printer lays out verbatim. Sections whose data is absent are left out
entirely, and optional fields inside a section are skipped rather than
printed blank. The function is pure; the same input always gives an equal
document.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from taxinvoice import config
from taxinvoice.models.inventory import LineItem
from taxinvoice.models.invoice import (
    BankDetails,
    Company,
    InvoiceMetadata,
    InvoiceRow,
    TotalsSummary,
)
from taxinvoice.numeric import ZERO, format_currency, format_percent, format_quantity, to_decimal
from taxinvoice.totals import calculate_totals, compute_total_quantity, line_amount, row_value

HEADER = "header"
SELLER = "seller"
METADATA = "metadata"
BUYER = "buyer"
ITEMS = "items"
TOTALS = "totals"
NOTES = "notes"
BANK = "bank"
FOOTER = "footer"

SECTION_ORDER: Tuple[str, ...] = (HEADER, SELLER, METADATA, BUYER, ITEMS, TOTALS, NOTES, BANK, FOOTER)

ITEM_COLUMNS: Tuple[str, ...] = ("SL", "Description", "Qty", "Rate", "Amount")

# Optional metadata fields, in print order, after Invoice No. and Date.
LOGISTICS_LABELS: Tuple[Tuple[str, str], ...] = (
    ("due_date", "Due Date"),
    ("e_way_bill_no", "e-Way Bill No."),
    ("delivery_note", "Delivery Note"),
    ("delivery_note_date", "Delivery Note Date"),
    ("mode_of_payment", "Mode/Terms of Payment"),
    ("reference_no", "Reference No."),
    ("other_references", "Other References"),
    ("buyer_order_no", "Buyer's Order No."),
    ("dispatch_doc_no", "Dispatch Doc No."),
    ("dispatched_through", "Dispatched through"),
    ("destination", "Destination"),
    ("bill_of_lading_no", "Bill of Lading/LR-RR No."),
    ("bill_of_lading_date", "Bill of Lading Date"),
    ("motor_vehicle_no", "Motor Vehicle No."),
    ("terms_of_delivery", "Terms of Delivery"),
)

BANK_LABELS: Tuple[Tuple[str, str], ...] = (
    ("account_holder_name", "A/c Holder's Name"),
    ("bank_name", "Bank Name"),
    ("account_no", "A/c No."),
    ("branch_and_ifsc", "Branch & IFS Code"),
    ("swift_code", "SWIFT Code"),
)


@dataclass(frozen=True)
class Field:
    """A line of text, optionally prefixed by a bold label."""

    value: str
    label: Optional[str] = None
    emphasis: bool = False
    rule_above: bool = False


@dataclass(frozen=True)
class Table:
    columns: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    footer: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class Section:
    name: str
    title: Optional[str] = None
    fields: Tuple[Field, ...] = ()
    table: Optional[Table] = None


@dataclass(frozen=True)
class InvoiceDocument:
    sections: Tuple[Section, ...]
    totals: TotalsSummary
    page_size: str = config.PAGE_SIZE

    @property
    def section_names(self) -> Tuple[str, ...]:
        return tuple(section.name for section in self.sections)

    def section(self, name: str) -> Optional[Section]:
        for section in self.sections:
            if section.name == name:
                return section
        return None


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _lines(values: Optional[Iterable]) -> List[str]:
    if not values or isinstance(values, str):
        values = [values] if values else []
    return [line for line in (_text(value) for value in values) if line]


def as_rows(items: Optional[Sequence]) -> List:
    """Ledger lines become :class:`InvoiceRow`; other row objects pass through."""
    rows = []
    for item in items or ():
        rows.append(InvoiceRow.from_line_item(item) if isinstance(item, LineItem) else item)
    return rows


def _header_section(copy: str) -> Section:
    designation = config.COPY_DESIGNATIONS.get(copy, copy.upper())
    return Section(
        name=HEADER,
        title=config.INVOICE_TITLE,
        fields=(Field(value=f"({designation})"),),
    )


def _company_fields(company: Company) -> List[Field]:
    result = [Field(value=line) for line in _lines(company.address)]
    if _text(company.gstin):
        result.append(Field(label="GSTIN/UIN", value=_text(company.gstin)))
    if _text(company.state):
        state = _text(company.state)
        if _text(company.state_code):
            state = f"{state} ({_text(company.state_code)})"
        result.append(Field(label="State", value=state))
    return result


def _seller_section(company: Optional[Company]) -> Optional[Section]:
    if company is None:
        return None
    result: List[Field] = []
    if _text(company.name):
        result.append(Field(value=_text(company.name), emphasis=True))
    result.extend(_company_fields(company))
    contacts = _lines(company.contact)
    if contacts:
        result.append(Field(label="Contact", value=", ".join(contacts)))
    if _text(company.email):
        result.append(Field(label="E-Mail", value=_text(company.email)))
    if _text(company.website):
        result.append(Field(value=_text(company.website)))
    if not result:
        return None
    return Section(name=SELLER, fields=tuple(result))


def _metadata_section(metadata: Optional[InvoiceMetadata]) -> Section:
    metadata = metadata or InvoiceMetadata()
    result = [
        Field(label="Invoice No.", value=_text(metadata.invoice_no)),
        Field(label="Date", value=_text(metadata.invoice_date)),
    ]
    for attr, label in LOGISTICS_LABELS:
        value = _text(getattr(metadata, attr, None))
        if value:
            result.append(Field(label=label, value=value))
    return Section(name=METADATA, fields=tuple(result))


def _buyer_section(buyer: Optional[Company]) -> Optional[Section]:
    if buyer is None:
        return None
    result: List[Field] = []
    if _text(buyer.name):
        result.append(Field(value=_text(buyer.name), emphasis=True))
    result.extend(_company_fields(buyer))
    if _text(buyer.pan):
        result.append(Field(label="PAN/IT No", value=_text(buyer.pan)))
    if _text(buyer.place_of_supply):
        result.append(Field(label="Place of Supply", value=_text(buyer.place_of_supply)))
    if not result:
        return None
    return Section(name=BUYER, title="Bill To:", fields=tuple(result))


def _row_cells(row, index: int) -> Tuple[str, ...]:
    sl_no = row_value(row, "sl_no") or index + 1
    quantity = _text(row_value(row, "quantity")) or "0"
    rate = to_decimal(row_value(row, "rate"), ZERO)
    amount = line_amount(row)
    return (
        str(sl_no),
        _text(row_value(row, "description")),
        quantity,
        format_currency(rate),
        format_currency(amount),
    )


def _items_section(rows: Sequence, totals: TotalsSummary) -> Optional[Section]:
    if not rows:
        return None
    table = Table(
        columns=ITEM_COLUMNS,
        rows=tuple(_row_cells(row, index) for index, row in enumerate(rows)),
        footer=("", "Total", format_quantity(compute_total_quantity(rows)), "", format_currency(totals.subtotal)),
    )
    return Section(name=ITEMS, table=table)


def _totals_section(totals: TotalsSummary, tax_rate: Decimal, previous_balance: Decimal) -> Section:
    result = [Field(label="Subtotal:", value=format_currency(totals.subtotal))]
    if totals.tax_amount > 0:
        result.append(
            Field(label=f"IGST ({format_percent(tax_rate)}%):", value=format_currency(totals.tax_amount))
        )
    result.append(
        Field(
            label="GRAND TOTAL:",
            value=format_currency(totals.grand_total),
            emphasis=True,
            rule_above=True,
        )
    )
    if previous_balance != 0:
        result.append(Field(label="Previous Balance:", value=format_currency(previous_balance)))
        result.append(Field(label="Current Balance:", value=format_currency(totals.running_balance)))
    return Section(name=TOTALS, fields=tuple(result))


def _notes_section(notes: Optional[str]) -> Optional[Section]:
    lines = _text(notes).splitlines()
    if not lines:
        return None
    return Section(name=NOTES, title="Notes:", fields=tuple(Field(value=line) for line in lines))


def _bank_section(bank: Optional[BankDetails]) -> Optional[Section]:
    if bank is None:
        return None
    result = [
        Field(label=label, value=_text(getattr(bank, attr, None)))
        for attr, label in BANK_LABELS
        if _text(getattr(bank, attr, None))
    ]
    if not result:
        return None
    return Section(name=BANK, title="Company's Bank Details", fields=tuple(result))


def _footer_section() -> Section:
    return Section(name=FOOTER, fields=(Field(value=config.FOOTER_NOTE),))


def render_invoice(
    company: Optional[Company],
    buyer: Optional[Company],
    metadata: Optional[InvoiceMetadata],
    items: Optional[Sequence],
    tax_rate_percent=config.TAX_RATE_PERCENT,
    previous_balance=None,
    bank: Optional[BankDetails] = None,
    notes: Optional[str] = None,
    copy: str = "original",
) -> InvoiceDocument:
    """Lay out an invoice; figures come from the totals calculator unchanged."""
    rows = as_rows(items)
    tax_rate = to_decimal(tax_rate_percent, ZERO)
    previous = to_decimal(previous_balance, ZERO)
    totals = calculate_totals(rows, tax_rate, previous).summary

    sections = (
        _header_section(copy),
        _seller_section(company),
        _metadata_section(metadata),
        _buyer_section(buyer),
        _items_section(rows, totals),
        _totals_section(totals, tax_rate, previous),
        _notes_section(notes),
        _bank_section(bank),
        _footer_section(),
    )
    return InvoiceDocument(sections=tuple(section for section in sections if section is not None), totals=totals)
