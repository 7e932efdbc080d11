"""Recurring billing module.

Once a month every pending invoice is charged through the payment provider
and its terminal status is recorded in the invoice store.

Components (leaves first):
- RetryExecutor (infrastructure.resilience.retry): bounded retry with backoff
- InvoiceProcessor: charges one invoice, classifies the outcome
- BillingDispatcher: partitions pending invoices into concurrent chunks
- BillingScheduler: arms the monthly trigger and re-arms on every fire
- BillingService: wires everything from settings
"""

from modules.billing.dispatcher import BillingDispatcher, partition
from modules.billing.processor import InvoiceProcessor
from modules.billing.scheduler import BillingScheduler, SchedulerState, next_run
from modules.billing.service import BillingService
from modules.billing.store import InMemoryInvoiceStore, InvoiceStore

__all__ = [
    "BillingDispatcher",
    "BillingScheduler",
    "BillingService",
    "InMemoryInvoiceStore",
    "InvoiceProcessor",
    "InvoiceStore",
    "SchedulerState",
    "next_run",
    "partition",
]
