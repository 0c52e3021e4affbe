"""Excel repository for loading the item catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from taxinvoice import config
from taxinvoice.models.inventory import InventoryRecord
from taxinvoice.numeric import ZERO, to_decimal

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["Item_Id", "Item_Name", "Rate", "HSN", "Unit"]


@dataclass
class CatalogColumnMap:
    """Column indexes for required fields."""

    item_id: int
    name: int
    rate: int
    hsn: int
    unit: int


class ExcelCatalogRepository:
    """Reads inventory records from an Excel sheet."""

    def __init__(self, path: Path | str = None, sheet_name: Optional[str] = None) -> None:
        self.path: Path = Path(path) if path else config.EXCEL_PATH
        self.sheet_name = sheet_name or config.EXCEL_SHEET_NAME
        if not self.path.exists():
            raise FileNotFoundError(f"Excel file not found: {self.path}")

        self._workbook = load_workbook(self.path, read_only=True, data_only=True)
        if self.sheet_name not in self._workbook.sheetnames:
            raise ValueError(f"Sheet '{self.sheet_name}' not found in Excel file.")
        self._sheet: Worksheet = self._workbook[self.sheet_name]
        self._columns = self._detect_columns()
        self._records: Optional[Dict[str, InventoryRecord]] = None

    def _detect_columns(self) -> CatalogColumnMap:
        """Detect columns from header row; raises if missing."""
        headers: Dict[str, int] = {}
        header_row = next(self._sheet.iter_rows(min_row=1, max_row=1, values_only=True), ())
        for idx, value in enumerate(header_row, start=1):
            if value is not None:
                headers[str(value).strip()] = idx

        missing = [col for col in REQUIRED_COLUMNS if col not in headers]
        if missing:
            raise ValueError(f"Missing required columns in Excel: {', '.join(missing)}")

        return CatalogColumnMap(
            item_id=headers["Item_Id"],
            name=headers["Item_Name"],
            rate=headers["Rate"],
            hsn=headers["HSN"],
            unit=headers["Unit"],
        )

    def list_records(self) -> List[InventoryRecord]:
        """Return catalog records in sheet order."""
        if self._records is None:
            self._records = {}
            for row_idx, row in enumerate(self._sheet.iter_rows(min_row=2, values_only=True), start=2):
                name = self._cell(row, self._columns.name)
                if name in (None, ""):
                    continue

                item_id = self._cell(row, self._columns.item_id)
                record = InventoryRecord(
                    id=str(item_id).strip() if item_id not in (None, "") else f"row-{row_idx}",
                    name=str(name).strip(),
                    rate=to_decimal(self._cell(row, self._columns.rate), ZERO),
                    hsn=str(self._cell(row, self._columns.hsn) or ""),
                    unit=str(self._cell(row, self._columns.unit) or ""),
                )
                if record.id in self._records:
                    logger.warning("Duplicate item id %s on row %d ignored", record.id, row_idx)
                    continue
                self._records[record.id] = record
            logger.info("Loaded %d catalog records from %s", len(self._records), self.path)
        return list(self._records.values())

    def get(self, record_id: str) -> Optional[InventoryRecord]:
        """Return a record or None if not found."""
        if self._records is None:
            self.list_records()
        return self._records.get(record_id)

    def close(self) -> None:
        self._workbook.close()

    @staticmethod
    def _cell(row, column: int):
        if column - 1 < len(row):
            return row[column - 1]
        return None
