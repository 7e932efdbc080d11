"""Per-invoice charge processing.

InvoiceProcessor is the isolation boundary of a billing run: whatever the
payment provider or the invoice store does, process() resolves to an
InvoiceOutcome and never raises, so one bad invoice cannot abort its chunk.
"""

from typing import Optional

from structlog.stdlib import BoundLogger

from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from infrastructure.resilience.retry import RetryExecutor, RetryPolicy
from modules.billing.classification import (
    charge_once,
    failure_reason_for,
    is_retryable,
)
from modules.billing.domain.models import (
    FailureReason,
    Invoice,
    InvoiceOutcome,
    InvoiceStatus,
)
from modules.billing.providers.base import PaymentProvider
from modules.billing.store import InvoiceStore

logger = get_module_logger()

DEFAULT_CHARGE_POLICY = RetryPolicy(
    max_retries=3,
    base_delay_seconds=0.1,
    is_retryable=is_retryable,
)


class InvoiceProcessor:
    """Charge one invoice and record its terminal status.

    Network errors are retried through the RetryExecutor. Retrying relies on
    the provider honouring the invoice id as an idempotency key (see
    modules.billing.providers.base), so a repeated request for an invoice
    whose first charge succeeded upstream does not charge the customer twice.

    Attributes:
        provider: PaymentProvider used to charge invoices
        store: InvoiceStore receiving status transitions
        executor: RetryExecutor wrapping each charge attempt
    """

    def __init__(
        self,
        provider: PaymentProvider,
        store: InvoiceStore,
        executor: Optional[RetryExecutor] = None,
    ) -> None:
        self.provider = provider
        self.store = store
        self.executor = executor or RetryExecutor(DEFAULT_CHARGE_POLICY)

    def process(self, invoice: Invoice) -> InvoiceOutcome:
        """Charge the invoice and write its terminal status to the store.

        Args:
            invoice: Pending invoice to charge

        Returns:
            InvoiceOutcome with status PAID, or FAILED and a failure reason
        """
        log = logger.bind(invoice_id=invoice.id, customer_id=invoice.customer_id)
        attempts = 0

        def attempt() -> OperationResult:
            nonlocal attempts
            attempts += 1
            return charge_once(self.provider, invoice)

        try:
            result = self.executor.execute(
                attempt, operation="charge_invoice", invoice_id=invoice.id
            )
        except Exception as e:
            log.error("invoice_charge_exception", error=str(e), exc_info=True)
            result = OperationResult.permanent_error(str(e))

        status, reason = self._terminal_status(result)
        recorded = self._record(invoice, status, reason, log)

        if status == InvoiceStatus.PAID:
            log.info(
                "invoice_paid",
                amount=str(invoice.amount.value),
                currency=invoice.amount.currency.value,
                attempts=attempts,
            )
        else:
            log.warning(
                "invoice_failed",
                reason=reason.value if reason else None,
                error=result.message,
                attempts=attempts,
            )

        return InvoiceOutcome(
            invoice_id=invoice.id,
            status=status,
            failure_reason=reason,
            attempts=attempts,
            recorded=recorded,
        )

    @staticmethod
    def _terminal_status(
        result: OperationResult,
    ) -> tuple[InvoiceStatus, Optional[FailureReason]]:
        if result.is_success:
            if result.data is True:
                return InvoiceStatus.PAID, None
            return InvoiceStatus.FAILED, FailureReason.INSUFFICIENT_FUNDS
        return InvoiceStatus.FAILED, failure_reason_for(result.error_code)

    def _record(
        self,
        invoice: Invoice,
        status: InvoiceStatus,
        reason: Optional[FailureReason],
        log: BoundLogger,
    ) -> bool:
        try:
            if status == InvoiceStatus.PAID:
                self.store.set_status(invoice.id, InvoiceStatus.PAID)
            else:
                self.store.mark_failed(invoice.id, reason or FailureReason.UNKNOWN)
        except Exception as e:
            log.error(
                "invoice_status_write_failed",
                status=status.value,
                error=str(e),
                exc_info=True,
            )
            return False
        return True
