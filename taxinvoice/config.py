"""Configuration constants for the Tax Invoice Wizard."""

from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Union

# Path to the Excel workbook containing the item catalog.
EXCEL_PATH: Path = Path("data/inventory.xlsx")

# Sheet name inside the Excel workbook.
EXCEL_SHEET_NAME: str = "Inventory"

# Name of the printer to target for paper copies. Empty means system default.
PRINTER_NAME: str = ""

# Folder where exported invoice PDFs are written.
PDF_OUTPUT_DIR: Path = Path("invoices")

# Fixed page format of the printed invoice.
PAGE_SIZE: str = "A4"

# Prefix for every currency figure on screen and on paper.
CURRENCY_SYMBOL: str = "₹"

# IGST rate applied to the subtotal when the caller does not pass one.
TAX_RATE_PERCENT: Decimal = Decimal("18")

# Days between the start of a fresh invoice and its default due date.
DEFAULT_DUE_DAYS: int = 30

DEFAULT_PAYMENT_TERMS: str = "30days"
DEFAULT_TRANSPORT_MODE: str = "road"

INVOICE_TITLE: str = "Tax Invoice"

# Designation printed next to the title, keyed by copy.
COPY_DESIGNATIONS: Dict[str, str] = {
    "original": "ORIGINAL FOR RECIPIENT",
    "duplicate": "DUPLICATE FOR TRANSPORTER",
    "triplicate": "TRIPLICATE FOR SUPPLIER",
}

FOOTER_NOTE: str = "Thank you for your business!"

# Seller profile used by the desktop entry point.
SELLER_PROFILE: Dict[str, Union[str, List[str]]] = {
    "name": "Your Company Name",
    "address": ["Street address", "City - PIN"],
    "gstin": "",
    "state": "",
    "state_code": "",
    "contact": [],
    "email": "",
    "website": "",
}

# Bank block printed on the invoice. Leave values empty to omit it.
BANK_DETAILS: Dict[str, str] = {
    "account_holder_name": "",
    "bank_name": "",
    "account_no": "",
    "branch_and_ifsc": "",
    "swift_code": "",
}

LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
