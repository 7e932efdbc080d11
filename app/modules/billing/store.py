"""Invoice storage interface and in-memory implementation.

The billing run only needs three operations from storage: list pending
invoices, record a new status, and record a failure. The protocol keeps the
core independent of the database; implementations must tolerate concurrent
writes to different invoice ids.
"""

import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Protocol

from infrastructure.logging import get_module_logger
from modules.billing.domain.errors import InvoiceNotFoundError
from modules.billing.domain.models import FailureReason, Invoice, InvoiceStatus

logger = get_module_logger()


class InvoiceStore(Protocol):
    """Storage interface consumed by the billing run.

    Methods:
        fetch_pending: Return pending invoices in a stable order
        set_status: Record a new status for an invoice
        mark_failed: Record FAILED together with its failure reason
    """

    def fetch_pending(self) -> List[Invoice]:
        """Return all invoices currently PENDING, in a stable order."""
        ...

    def set_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        """Record a new status for the invoice."""
        ...

    def mark_failed(self, invoice_id: int, reason: FailureReason) -> None:
        """Record status FAILED with the given reason."""
        ...


class InMemoryInvoiceStore:
    """Thread-safe in-memory implementation of InvoiceStore.

    Invoices are kept as immutable snapshots keyed by id; every write
    replaces the snapshot under a lock. Suitable for development, demos and
    tests.
    """

    def __init__(self, invoices: Optional[Iterable[Invoice]] = None) -> None:
        self._invoices: Dict[int, Invoice] = {}
        self._lock = threading.Lock()
        for invoice in invoices or []:
            self.add(invoice)

    def add(self, invoice: Invoice) -> Invoice:
        """Insert or replace an invoice."""
        with self._lock:
            self._invoices[invoice.id] = invoice
        return invoice

    def fetch(self, invoice_id: int) -> Invoice:
        """Return a single invoice.

        Raises:
            InvoiceNotFoundError: if the id is unknown
        """
        with self._lock:
            invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    def fetch_all(self) -> List[Invoice]:
        with self._lock:
            return [self._invoices[key] for key in sorted(self._invoices)]

    def fetch_with_status(self, status: InvoiceStatus) -> List[Invoice]:
        """Return invoices with the given status, ordered by id."""
        return [invoice for invoice in self.fetch_all() if invoice.status == status]

    def fetch_pending(self) -> List[Invoice]:
        return self.fetch_with_status(InvoiceStatus.PENDING)

    def set_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        """Record a new status.

        A failure reason only accompanies FAILED, so any other status clears it.
        """
        with self._lock:
            invoice = self._get_locked(invoice_id)
            reason = invoice.failure_reason if status == InvoiceStatus.FAILED else None
            self._invoices[invoice_id] = replace(
                invoice, status=status, failure_reason=reason
            )
        logger.debug("invoice_status_set", invoice_id=invoice_id, status=status.value)

    def mark_failed(self, invoice_id: int, reason: FailureReason) -> None:
        with self._lock:
            invoice = self._get_locked(invoice_id)
            self._invoices[invoice_id] = replace(
                invoice, status=InvoiceStatus.FAILED, failure_reason=reason
            )
        logger.debug(
            "invoice_marked_failed", invoice_id=invoice_id, reason=reason.value
        )

    def get_stats(self) -> Dict[str, int]:
        """Count invoices per status."""
        stats = {status.value: 0 for status in InvoiceStatus}
        for invoice in self.fetch_all():
            stats[invoice.status.value] += 1
        return stats

    def _get_locked(self, invoice_id: int) -> Invoice:
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice
