"""In-progress collection of invoice line items."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Callable, Iterable, Iterator, Optional, Tuple

from taxinvoice.models.inventory import InventoryRecord, LineItem
from taxinvoice.numeric import ONE, ZERO, coerce_quantity, exact_context

logger = logging.getLogger(__name__)


def _new_line_id() -> str:
    return f"line-{uuid.uuid4().hex}"


class Ledger:
    """Holds the line items of the invoice being built.

    The items tuple is rebuilt on every mutation; untouched lines keep their
    identity, so readers holding the previous tuple never see a change.
    """

    def __init__(
        self,
        items: Iterable[LineItem] = (),
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._items: Tuple[LineItem, ...] = tuple(items)
        self._on_change = on_change

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self._items)

    def find(self, line_id: str) -> Optional[LineItem]:
        for item in self._items:
            if item.id == line_id:
                return item
        return None

    def add(self, record: InventoryRecord) -> LineItem:
        """Add a catalog record or bump the quantity of its existing line."""
        for index, item in enumerate(self._items):
            if item.record.id == record.id:
                with exact_context():
                    merged = replace(item, quantity=item.quantity + ONE)
                self._set(self._items[:index] + (merged,) + self._items[index + 1 :])
                logger.debug("Merged %s into %s (qty %s)", record.id, merged.id, merged.quantity)
                return merged

        line = LineItem(id=_new_line_id(), record=record, quantity=ONE, discount=ZERO)
        self._set(self._items + (line,))
        logger.debug("Added %s as %s", record.id, line.id)
        return line

    def update_quantity(self, line_id: str, value) -> Optional[LineItem]:
        """Set a line's quantity; invalid or non-positive values become 1."""
        quantity = coerce_quantity(value)
        updated: Optional[LineItem] = None
        items = []
        for item in self._items:
            if item.id == line_id:
                updated = replace(item, quantity=quantity)
                items.append(updated)
            else:
                items.append(item)
        if updated is None:
            return None
        self._set(tuple(items))
        return updated

    def remove(self, line_id: str) -> None:
        remaining = tuple(item for item in self._items if item.id != line_id)
        if len(remaining) != len(self._items):
            self._set(remaining)

    def clear(self) -> None:
        self._set(())

    def set_items(self, items: Iterable[LineItem]) -> None:
        self._set(tuple(items))

    def _set(self, items: Tuple[LineItem, ...]) -> None:
        self._items = items
        if self._on_change is not None:
            self._on_change()
