"""Billing service composition root.

Wires the retry executor, invoice processor, dispatcher and scheduler from
BillingSettings, and exposes the two entry points the application uses:
arming the monthly schedule and running a billing sweep on demand.
"""

import random
import time
from datetime import datetime
from typing import Callable, Optional

from infrastructure.configuration import BillingSettings
from infrastructure.logging import get_module_logger
from infrastructure.resilience.retry import RetryExecutor, RetryPolicy
from modules.billing.classification import is_retryable
from modules.billing.dispatcher import BillingDispatcher
from modules.billing.domain.models import BillingRunSummary
from modules.billing.processor import InvoiceProcessor
from modules.billing.providers.base import PaymentProvider
from modules.billing.scheduler import BillingScheduler, Timer, utc_now
from modules.billing.store import InvoiceStore

logger = get_module_logger()


class BillingService:
    """Recurring billing facade.

    Attributes:
        processor: InvoiceProcessor charging single invoices
        dispatcher: BillingDispatcher fanning out a run
        scheduler: BillingScheduler triggering the dispatcher monthly
    """

    def __init__(
        self,
        provider: PaymentProvider,
        store: InvoiceStore,
        timer: Timer,
        settings: Optional[BillingSettings] = None,
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], None] = time.sleep,
        random_between: Callable[[float, float], float] = random.uniform,
    ) -> None:
        settings = settings or BillingSettings()

        policy = RetryPolicy(
            max_retries=settings.max_retries,
            base_delay_seconds=settings.retry_base_delay_seconds,
            is_retryable=is_retryable,
        )
        executor = RetryExecutor(policy, sleep=sleep, random_between=random_between)

        self.processor = InvoiceProcessor(provider, store, executor)
        self.dispatcher = BillingDispatcher(
            store,
            self.processor,
            concurrent_chunks=settings.concurrent_chunks,
            run_timeout_seconds=settings.run_timeout_seconds,
        )
        self.scheduler = BillingScheduler(self.dispatcher, timer, clock=clock)

        logger.info(
            "billing_service_initialized",
            concurrent_chunks=settings.concurrent_chunks,
            max_retries=settings.max_retries,
            retry_base_delay_seconds=settings.retry_base_delay_seconds,
            run_timeout_seconds=settings.run_timeout_seconds,
        )

    def start_scheduling(self) -> Optional[datetime]:
        """Arm the monthly billing schedule."""
        return self.scheduler.start()

    def stop_scheduling(self) -> None:
        self.scheduler.stop()

    def run_now(self, run_id: Optional[str] = None) -> BillingRunSummary:
        """Run a billing sweep immediately, outside the schedule."""
        return self.dispatcher.run_once(run_id=run_id)
