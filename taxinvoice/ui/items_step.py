"""PyQt window for step 1 of the invoice wizard: adding items."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QCompleter,
    QGroupBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QShortcut,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from taxinvoice.models.inventory import InventoryRecord
from taxinvoice.numeric import format_currency, format_quantity
from taxinvoice.totals import compute_totals
from taxinvoice.wizard_state import EmptyInvoiceError, WizardState

QTY_COLUMN = 2


class ItemsStepWindow(QMainWindow):
    """Search the catalog, build the line items and move on to the customer step."""

    advanced = pyqtSignal()

    def __init__(self, state: WizardState, records: Sequence[InventoryRecord]) -> None:
        super().__init__()
        self.setWindowTitle("Invoice Wizard – Step 1 of 3: Add Items")
        self.setMinimumSize(900, 600)

        self.state = state
        self.records_by_label: Dict[str, InventoryRecord] = {self._label(r): r for r in records}
        self._row_ids: List[str] = []
        self._refreshing = False

        self._build_ui()
        self._unsubscribe = self.state.subscribe(lambda _state: self._refresh())
        self.state.start_flow()
        self._refresh()

    @staticmethod
    def _label(record: InventoryRecord) -> str:
        return f"{record.name} (HSN {record.hsn})" if record.hsn else record.name

    def _build_ui(self) -> None:
        central = QWidget()
        root_layout = QVBoxLayout()

        search_layout = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search items, then press Enter to add...")
        self.search_input.returnPressed.connect(self._on_search_enter)
        completer = QCompleter(list(self.records_by_label.keys()))
        completer.setCaseSensitivity(Qt.CaseInsensitive)
        completer.setFilterMode(Qt.MatchContains)
        completer.setCompletionMode(QCompleter.PopupCompletion)
        completer.activated[str].connect(self._add_by_label)
        self.search_input.setCompleter(completer)
        search_layout.addWidget(QLabel("Item:"))
        search_layout.addWidget(self.search_input, 1)

        self.table = QTableWidget(0, 5)
        self.table.setHorizontalHeaderLabels(["Item", "HSN", "Qty", "Rate", "Amount"])
        self.table.setEditTriggers(QAbstractItemView.DoubleClicked | QAbstractItemView.EditKeyPressed)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.itemChanged.connect(self._on_item_changed)
        QShortcut(QKeySequence(Qt.Key_Delete), self.table, activated=self._remove_selected)

        totals_group = QGroupBox("Summary (before GST)")
        totals_layout = QGridLayout()
        self.count_value = QLabel("0")
        self.total_value = QLabel(format_currency(0))
        totals_layout.addWidget(QLabel("Items count"), 0, 0)
        totals_layout.addWidget(self.count_value, 0, 1)
        totals_layout.addWidget(QLabel("Total"), 1, 0)
        totals_layout.addWidget(self.total_value, 1, 1)
        totals_group.setLayout(totals_layout)

        buttons_layout = QHBoxLayout()
        self.remove_button = QPushButton("Remove")
        self.remove_button.clicked.connect(self._remove_selected)
        self.clear_button = QPushButton("Clear Items")
        self.clear_button.clicked.connect(self.state.reset)
        self.next_button = QPushButton("Next: Customer (Step 2 of 3)")
        self.next_button.clicked.connect(self._on_next_clicked)
        buttons_layout.addWidget(self.remove_button)
        buttons_layout.addStretch()
        buttons_layout.addWidget(self.clear_button)
        buttons_layout.addWidget(self.next_button)

        root_layout.addLayout(search_layout)
        root_layout.addWidget(self.table, 1)
        root_layout.addWidget(totals_group)
        root_layout.addLayout(buttons_layout)

        central.setLayout(root_layout)
        self.setCentralWidget(central)

    def _on_search_enter(self) -> None:
        self._add_by_label(self.search_input.text().strip())

    def _add_by_label(self, label: str) -> None:
        record = self.records_by_label.get(label)
        if record is None:
            matches = [r for key, r in self.records_by_label.items() if label and label.lower() in key.lower()]
            record = matches[0] if len(matches) == 1 else None
        if record is None:
            return
        self.state.ledger.add(record)
        self.search_input.clear()

    def _on_item_changed(self, cell: QTableWidgetItem) -> None:
        if self._refreshing or cell.column() != QTY_COLUMN:
            return
        line_id = self._row_ids[cell.row()]
        self.state.ledger.update_quantity(line_id, cell.text())

    def _remove_selected(self) -> None:
        row = self.table.currentRow()
        if 0 <= row < len(self._row_ids):
            self.state.ledger.remove(self._row_ids[row])

    def _refresh(self) -> None:
        items = self.state.items
        self._refreshing = True
        try:
            self._row_ids = [item.id for item in items]
            self.table.setRowCount(len(items))
            for row, item in enumerate(items):
                values = [
                    item.description,
                    item.hsn,
                    format_quantity(item.quantity),
                    format_currency(item.rate),
                    format_currency(item.amount),
                ]
                for col, value in enumerate(values):
                    cell = QTableWidgetItem(value)
                    if col != QTY_COLUMN:
                        cell.setFlags(cell.flags() & ~Qt.ItemIsEditable)
                    self.table.setItem(row, col, cell)
            self.table.resizeColumnsToContents()
        finally:
            self._refreshing = False

        self.count_value.setText(str(len(items)))
        self.total_value.setText(format_currency(compute_totals(items, 0).subtotal))

    def _on_next_clicked(self) -> None:
        try:
            self.state.require_items()
        except EmptyInvoiceError as exc:
            QMessageBox.warning(self, "No items", f"{exc} (use search and Enter).")
            return
        self.advanced.emit()

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        super().closeEvent(event)
