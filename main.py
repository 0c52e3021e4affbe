"""Entry point for the Tax Invoice Wizard desktop app."""

import logging
import sys
from datetime import date

from PyQt5.QtWidgets import QApplication, QMessageBox

from taxinvoice import config
from taxinvoice.data.excel_repo import ExcelCatalogRepository
from taxinvoice.models.invoice import BankDetails, Company, InvoiceMetadata
from taxinvoice.printing.pdf_printer import InvoicePrinter
from taxinvoice.review import build_invoice_document
from taxinvoice.ui.items_step import ItemsStepWindow
from taxinvoice.wizard_state import WizardState

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    app = QApplication(sys.argv)

    try:
        records = ExcelCatalogRepository().list_records()
    except (OSError, ValueError) as exc:
        logger.error("Catalog could not be loaded: %s", exc)
        QMessageBox.critical(None, "Excel Error", f"Failed to load Excel catalog:\n{exc}")
        records = []

    state = WizardState()
    window = ItemsStepWindow(state, records)

    def export_draft() -> None:
        today = date.today()
        document = build_invoice_document(
            state,
            seller=Company(**config.SELLER_PROFILE),
            metadata=InvoiceMetadata(invoice_no="DRAFT", invoice_date=today.strftime("%d-%b-%Y")),
            bank=BankDetails(**config.BANK_DETAILS),
        )
        target = config.PDF_OUTPUT_DIR / f"invoice-draft-{today:%Y%m%d}.pdf"
        printer = InvoicePrinter()
        if not printer.export_pdf(document, target):
            QMessageBox.critical(window, "Print Failed", "Could not write the invoice PDF.")
            return

        answer = QMessageBox.question(
            window,
            "Invoice",
            f"Draft invoice written to {target}.\n\nSend it to the printer as well?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if answer == QMessageBox.Yes and not printer.print_document(document):
            QMessageBox.critical(window, "Print Failed", "Could not print the invoice. Check the printer.")

    window.advanced.connect(export_draft)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
