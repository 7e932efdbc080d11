"""Billing run fan-out.

Pending invoices are split into at most `concurrent_chunks` contiguous
chunks. Chunks run in parallel on a thread pool, invoices inside a chunk run
strictly one after another. This bounds in-flight provider requests to the
chunk count regardless of how many invoices are pending, and because every
invoice belongs to exactly one chunk no two workers ever write the same
invoice.
"""

import contextvars
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from infrastructure.logging import bind_run_context, get_module_logger
from modules.billing.domain.models import BillingRunSummary, Invoice, InvoiceOutcome
from modules.billing.processor import InvoiceProcessor
from modules.billing.store import InvoiceStore

logger = get_module_logger()

T = TypeVar("T")

DEFAULT_CONCURRENT_CHUNKS = 10


def partition(items: Sequence[T], concurrent_chunks: int) -> List[List[T]]:
    """Split items into contiguous, non-overlapping chunks.

    The chunk size is ceil(len(items) / concurrent_chunks), which yields at
    most `concurrent_chunks` chunks; only the last one may be smaller.
    Concatenating the chunks reproduces `items` exactly.

    Args:
        items: Ordered items to split
        concurrent_chunks: Maximum number of chunks (K)

    Returns:
        List of chunks, empty when there are no items

    Raises:
        ValueError: if concurrent_chunks is less than 1
    """
    if concurrent_chunks < 1:
        raise ValueError("concurrent_chunks must be at least 1")
    if not items:
        return []

    chunk_size = math.ceil(len(items) / concurrent_chunks)
    return [list(items[i : i + chunk_size]) for i in range(0, len(items), chunk_size)]


class BillingDispatcher:
    """Charge every pending invoice, one chunk per worker thread.

    run_once() blocks until every chunk has finished: it is a barrier and
    reports the run only through its returned summary and the logs.

    Attributes:
        store: InvoiceStore providing pending invoices
        processor: InvoiceProcessor charging individual invoices
        concurrent_chunks: Maximum number of chunks processed in parallel
        run_timeout_seconds: Optional run deadline. Once it passes, workers
            finish their current invoice but start no new one.
    """

    def __init__(
        self,
        store: InvoiceStore,
        processor: InvoiceProcessor,
        concurrent_chunks: int = DEFAULT_CONCURRENT_CHUNKS,
        run_timeout_seconds: Optional[float] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if concurrent_chunks < 1:
            raise ValueError("concurrent_chunks must be at least 1")
        if run_timeout_seconds is not None and run_timeout_seconds <= 0:
            raise ValueError("run_timeout_seconds must be positive")
        self.store = store
        self.processor = processor
        self.concurrent_chunks = concurrent_chunks
        self.run_timeout_seconds = run_timeout_seconds
        self._monotonic = monotonic

    def run_once(self, run_id: Optional[str] = None) -> BillingRunSummary:
        """Process all currently pending invoices.

        Args:
            run_id: Identifier bound to the run's log entries. Defaults to the
                run id of an enclosing run context, else a new one.

        Returns:
            BillingRunSummary of the run
        """
        with bind_run_context(run_id) as bound_run_id:
            summary = BillingRunSummary(run_id=bound_run_id)

            pending = self.store.fetch_pending()
            summary.total = len(pending)
            logger.info(
                "billing_run_started",
                pending=summary.total,
                concurrent_chunks=self.concurrent_chunks,
            )

            if not pending:
                logger.info("billing_run_no_pending_invoices")
                return summary

            chunks = partition(pending, self.concurrent_chunks)
            summary.chunks = len(chunks)

            deadline = None
            if self.run_timeout_seconds is not None:
                deadline = self._monotonic() + self.run_timeout_seconds

            with ThreadPoolExecutor(
                max_workers=len(chunks), thread_name_prefix="billing-chunk"
            ) as pool:
                futures = [
                    pool.submit(
                        contextvars.copy_context().run,
                        self._process_chunk,
                        index,
                        chunk,
                        deadline,
                    )
                    for index, chunk in enumerate(chunks)
                ]
                results = [future.result() for future in futures]

            for outcomes, skipped in results:
                for outcome in outcomes:
                    summary.record(outcome)
                summary.skipped += skipped
            summary.completed = summary.skipped == 0

            logger.info("billing_run_completed", **summary.as_dict())
            return summary

    def _process_chunk(
        self,
        index: int,
        chunk: List[Invoice],
        deadline: Optional[float],
    ) -> Tuple[List[InvoiceOutcome], int]:
        outcomes: List[InvoiceOutcome] = []

        for position, invoice in enumerate(chunk):
            if deadline is not None and self._monotonic() >= deadline:
                skipped = len(chunk) - position
                logger.warning(
                    "billing_run_deadline_reached",
                    chunk=index,
                    processed=position,
                    skipped=skipped,
                )
                return outcomes, skipped
            outcomes.append(self.processor.process(invoice))

        logger.info("billing_chunk_completed", chunk=index, invoices=len(chunk))
        return outcomes, 0
