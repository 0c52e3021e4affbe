"""Invoice output via QTextDocument to a PDF file or a system printer."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt5.QtCore import QMarginsF
from PyQt5.QtGui import QPageLayout, QPageSize, QTextDocument
from PyQt5.QtPrintSupport import QPrinter

from taxinvoice import config
from taxinvoice.printing.html import build_html
from taxinvoice.rendering.document import InvoiceDocument

logger = logging.getLogger(__name__)

_PAGE_SIZES = {
    "A4": QPageSize.A4,
    "A5": QPageSize.A5,
    "Letter": QPageSize.Letter,
}


class InvoicePrinter:
    """Render invoice documents on fixed-size pages.

    A ``QApplication`` (or ``QGuiApplication``) must exist before printing.
    """

    def __init__(self, printer_name: str | None = None, margin_mm: float = 7.0) -> None:
        self.printer_name = printer_name if printer_name is not None else config.PRINTER_NAME
        self.margin_mm = margin_mm

    def _setup(self, printer: QPrinter, page_size: str) -> None:
        size = QPageSize(_PAGE_SIZES.get(page_size, QPageSize.A4))
        margins = QMarginsF(self.margin_mm, self.margin_mm, self.margin_mm, self.margin_mm)
        printer.setPageLayout(QPageLayout(size, QPageLayout.Portrait, margins, QPageLayout.Millimeter))

    def _render(self, document: InvoiceDocument, printer: QPrinter) -> None:
        doc = QTextDocument()
        doc.setHtml(build_html(document))
        doc.setPageSize(printer.pageRect(QPrinter.Point).size())
        doc.print_(printer)

    def export_pdf(self, document: InvoiceDocument, path: Path | str) -> bool:
        """Write ``document`` as a PDF; returns True on success."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        printer = QPrinter(QPrinter.HighResolution)
        printer.setOutputFormat(QPrinter.PdfFormat)
        printer.setOutputFileName(str(target))
        self._setup(printer, document.page_size)

        if not printer.isValid():
            logger.error("PDF printer is not available for %s", target)
            return False

        self._render(document, printer)
        logger.info("Invoice exported to %s", target)
        return target.exists()

    def print_document(self, document: InvoiceDocument) -> bool:
        """Send ``document`` to the configured printer; returns True on success."""
        printer = QPrinter(QPrinter.HighResolution)
        if self.printer_name:
            printer.setPrinterName(self.printer_name)
        self._setup(printer, document.page_size)

        if not printer.isValid():
            logger.error("Printer %r is not available", self.printer_name)
            return False

        self._render(document, printer)
        return printer.isValid()
