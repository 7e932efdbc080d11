"""Billing application entry point.

Wires settings, logging, the invoice store and the payment provider, arms
the monthly billing schedule and keeps the schedule loop running until the
process is interrupted.
"""

import random
import signal
from decimal import Decimal
from typing import List

from dotenv import load_dotenv

from infrastructure.configuration import settings
from infrastructure.logging import configure_logging, get_module_logger
from jobs import scheduled_tasks
from modules.billing.domain.models import Currency, Customer, Invoice, InvoiceStatus, Money
from modules.billing.providers import MockPaymentProvider
from modules.billing.service import BillingService
from modules.billing.store import InMemoryInvoiceStore

logger = get_module_logger()

load_dotenv()


def seed_customers(count: int = 100) -> List[Customer]:
    """Generate demo customers, each billed in a random currency."""
    currencies = list(Currency)
    return [
        Customer(id=customer_id, currency=random.choice(currencies))
        for customer_id in range(1, count + 1)
    ]


def seed_invoices(customers: List[Customer], invoices_per_customer: int = 10) -> List[Invoice]:
    """Generate demo invoices: the latest invoice of each customer is pending."""
    invoices = []
    next_id = 1
    for customer in customers:
        for index in range(invoices_per_customer):
            status = (
                InvoiceStatus.PENDING
                if index == invoices_per_customer - 1
                else InvoiceStatus.PAID
            )
            invoices.append(
                Invoice(
                    id=next_id,
                    customer_id=customer.id,
                    amount=Money(
                        value=Decimal(random.randint(1000, 50000)) / 100,
                        currency=customer.currency,
                    ),
                    status=status,
                )
            )
            next_id += 1
    return invoices


def main():
    """Main function to start the application."""
    configure_logging()
    logger.info("application_startup", git_sha=settings.GIT_SHA, prefix=settings.PREFIX)

    billing_settings = settings.billing
    customers = seed_customers() if billing_settings.seed_demo_data else []
    store = InMemoryInvoiceStore(seed_invoices(customers))
    billing = BillingService(
        provider=MockPaymentProvider(customers=customers),
        store=store,
        timer=scheduled_tasks.ScheduleTimer(
            check_interval_seconds=billing_settings.scheduler_poll_interval_seconds
        ),
        settings=billing_settings,
    )

    if not billing_settings.scheduler_enabled:
        logger.info("billing_scheduler_disabled")
        return

    scheduled_tasks.init(billing)
    stop_run_continuously = scheduled_tasks.run_continuously(
        interval=billing_settings.scheduler_poll_interval_seconds
    )

    try:
        signal.pause()
    except KeyboardInterrupt:
        pass
    finally:
        stop_run_continuously.set()
        billing.stop_scheduling()
        logger.info("application_shutdown", invoices=store.get_stats())


if __name__ == "__main__":
    main()
