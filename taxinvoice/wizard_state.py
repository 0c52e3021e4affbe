"""Session-scoped state shared by every step of the invoice wizard."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional, Tuple

from taxinvoice import config
from taxinvoice.ledger import Ledger
from taxinvoice.models.inventory import LineItem
from taxinvoice.models.invoice import Company, InvoiceOptions, PaymentTerms, TransportMode

logger = logging.getLogger(__name__)

Listener = Callable[["WizardState"], None]


class EmptyInvoiceError(ValueError):
    """Raised when the wizard is asked to move on without any line item."""

    def __init__(self, message: str = "Add at least one item before continuing.") -> None:
        super().__init__(message)


def default_options(now: datetime) -> InvoiceOptions:
    return InvoiceOptions(
        payment_terms=PaymentTerms(config.DEFAULT_PAYMENT_TERMS),
        due_date=(now + timedelta(days=config.DEFAULT_DUE_DAYS)).date(),
        notes="",
        transport_mode=TransportMode(config.DEFAULT_TRANSPORT_MODE),
        vehicle_no="",
    )


class WizardState:
    """Single source of truth for the items, customer and invoice options.

    One instance lives for the whole session and is handed to every step.
    It never stores totals: those are recomputed from the items when needed.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._listeners: List[Listener] = []
        self._muted = False
        self.ledger = Ledger(on_change=self._notify)
        self.company: Optional[Company] = None
        self.options: InvoiceOptions = default_options(clock())

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return self.ledger.items

    def set_items(self, items: Iterable[LineItem]) -> None:
        self.ledger.set_items(items)

    def set_company(self, company: Optional[Company]) -> None:
        self.company = company
        self._notify()

    def set_options(self, options: InvoiceOptions) -> None:
        self.options = options
        self._notify()

    def update_options(self, **changes) -> InvoiceOptions:
        self.set_options(replace(self.options, **changes))
        return self.options

    def reset(self) -> None:
        """Drop items and customer and recompute the default options."""
        self._muted = True
        try:
            self.ledger.clear()
            self.company = None
            self.options = default_options(self._clock())
        finally:
            self._muted = False
        logger.debug("Wizard state reset; due date %s", self.options.due_date)
        self._notify()

    def start_flow(self) -> None:
        """Entering the first step with no items means a fresh invoice."""
        if not self.items:
            self.reset()

    def can_advance(self) -> bool:
        return len(self.ledger) > 0

    def require_items(self) -> None:
        if not self.can_advance():
            raise EmptyInvoiceError()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if self._muted:
            return
        for listener in list(self._listeners):
            listener(self)
