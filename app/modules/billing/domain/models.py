"""Billing domain models.

Lightweight dataclasses (not Pydantic) describing invoices and the outcomes
of charging them. The invoice store owns the authoritative state; these
objects are snapshots handed to the billing run.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional


class Currency(Enum):
    EUR = "EUR"
    USD = "USD"
    DKK = "DKK"
    SEK = "SEK"
    GBP = "GBP"


class InvoiceStatus(Enum):
    """Invoice lifecycle status.

    Only PENDING invoices are eligible for a billing run. PAID and FAILED are
    terminal and never revisited by a later run.
    """

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


class FailureReason(Enum):
    """Why an invoice ended up FAILED. Set only together with FAILED."""

    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    NETWORK = "NETWORK"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Money:
    value: Decimal
    currency: Currency


@dataclass(frozen=True)
class Customer:
    id: int
    currency: Currency


@dataclass(frozen=True)
class Invoice:
    """Snapshot of an invoice as returned by the invoice store.

    Attributes:
        id: Unique, stable identifier. Doubles as the provider idempotency key.
        customer_id: Identifier of the customer being charged.
        amount: Amount and currency to charge.
        status: Current InvoiceStatus.
        failure_reason: Set only when status is FAILED.
    """

    id: int
    customer_id: int
    amount: Money
    status: InvoiceStatus = InvoiceStatus.PENDING
    failure_reason: Optional[FailureReason] = None


@dataclass(frozen=True)
class InvoiceOutcome:
    """Terminal result of processing one invoice in a billing run.

    Attributes:
        invoice_id: The processed invoice.
        status: PAID or FAILED.
        failure_reason: Reason when FAILED, otherwise None.
        attempts: Number of charge requests sent to the payment provider.
        recorded: False when the status could not be written to the store.
    """

    invoice_id: int
    status: InvoiceStatus
    failure_reason: Optional[FailureReason] = None
    attempts: int = 0
    recorded: bool = True

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID


@dataclass
class BillingRunSummary:
    """Aggregated statistics of one billing run.

    Attributes:
        run_id: Identifier bound to the run's log entries.
        total: Pending invoices fetched at the start of the run.
        paid: Invoices that ended PAID.
        failed: Invoices that ended FAILED.
        skipped: Invoices left PENDING because the run deadline passed.
        unrecorded: Outcomes that could not be written to the store.
        chunks: Number of chunks the pending invoices were split into.
        failure_reasons: Count of FAILED invoices per FailureReason value.
        completed: False when the deadline stopped the run early.
    """

    run_id: str
    total: int = 0
    paid: int = 0
    failed: int = 0
    skipped: int = 0
    unrecorded: int = 0
    chunks: int = 0
    failure_reasons: Dict[str, int] = field(default_factory=dict)
    completed: bool = True

    def record(self, outcome: InvoiceOutcome) -> None:
        """Fold a single invoice outcome into the summary."""
        if outcome.is_paid:
            self.paid += 1
        else:
            self.failed += 1
            if outcome.failure_reason is not None:
                reason = outcome.failure_reason.value
                self.failure_reasons[reason] = self.failure_reasons.get(reason, 0) + 1
        if not outcome.recorded:
            self.unrecorded += 1

    def as_dict(self) -> Dict[str, object]:
        return {
            "run_id": self.run_id,
            "total": self.total,
            "paid": self.paid,
            "failed": self.failed,
            "skipped": self.skipped,
            "unrecorded": self.unrecorded,
            "chunks": self.chunks,
            "failure_reasons": dict(self.failure_reasons),
            "completed": self.completed,
        }
