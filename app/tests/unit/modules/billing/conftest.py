"""Shared fixtures for billing tests."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from infrastructure.resilience.retry import RetryExecutor, RetryPolicy
from modules.billing.classification import is_retryable
from modules.billing.domain.models import Currency, Invoice, InvoiceStatus, Money
from modules.billing.processor import InvoiceProcessor
from modules.billing.store import InMemoryInvoiceStore


@pytest.fixture
def invoice_factory():
    """Factory for creating Invoice instances."""

    def _factory(
        id: int = 123,
        customer_id: int = 999,
        value: str = "100",
        currency: Currency = Currency.EUR,
        status: InvoiceStatus = InvoiceStatus.PENDING,
    ) -> Invoice:
        return Invoice(
            id=id,
            customer_id=customer_id,
            amount=Money(Decimal(value), currency),
            status=status,
        )

    return _factory


@pytest.fixture
def pending_invoices(invoice_factory):
    """Factory for a list of pending invoices with ids 1..count."""

    def _factory(count: int):
        return [invoice_factory(id=i, customer_id=1000 + i) for i in range(1, count + 1)]

    return _factory


@pytest.fixture
def invoice_store():
    return InMemoryInvoiceStore()


@pytest.fixture
def payment_provider():
    """Mock payment provider accepting every charge by default."""
    provider = MagicMock()
    provider.charge.return_value = True
    return provider


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def charge_executor(sleep):
    """Executor with the production charge policy and no real waiting."""
    policy = RetryPolicy(max_retries=3, base_delay_seconds=0.1, is_retryable=is_retryable)
    return RetryExecutor(policy, sleep=sleep, random_between=lambda low, high: high)


@pytest.fixture
def processor(payment_provider, invoice_store, charge_executor):
    return InvoiceProcessor(payment_provider, invoice_store, charge_executor)
