"""Review step: turn the wizard state into a printable invoice document."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from taxinvoice import config
from taxinvoice.models.invoice import BankDetails, Company, InvoiceMetadata
from taxinvoice.rendering.document import InvoiceDocument, render_invoice
from taxinvoice.wizard_state import WizardState


def metadata_with_options(metadata: InvoiceMetadata, state: WizardState) -> InvoiceMetadata:
    """Fill logistics fields the caller left empty from the wizard options."""
    options = state.options
    defaults = {
        "due_date": options.due_date.isoformat() if options.due_date else None,
        "mode_of_payment": options.payment_terms.label,
        "dispatched_through": options.transport_mode.label,
        "motor_vehicle_no": options.vehicle_no.strip() or None,
    }
    changes = {key: value for key, value in defaults.items() if value and not getattr(metadata, key)}
    return replace(metadata, **changes) if changes else metadata


def build_invoice_document(
    state: WizardState,
    seller: Company,
    metadata: InvoiceMetadata,
    bank: Optional[BankDetails] = None,
    tax_rate_percent=config.TAX_RATE_PERCENT,
    previous_balance=None,
    copy: str = "original",
) -> InvoiceDocument:
    """Render the invoice held by ``state``.

    Raises:
        EmptyInvoiceError: if no line item has been added yet.
    """
    state.require_items()
    return render_invoice(
        company=seller,
        buyer=state.company,
        metadata=metadata_with_options(metadata, state),
        items=state.items,
        tax_rate_percent=tax_rate_percent,
        previous_balance=previous_balance,
        bank=bank,
        notes=state.options.notes,
        copy=copy,
    )
