"""Unit tests for the billing service composition root."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from infrastructure.configuration import BillingSettings
from modules.billing.domain.errors import NetworkError
from modules.billing.domain.models import FailureReason, InvoiceStatus
from modules.billing.scheduler import SchedulerState
from modules.billing.service import BillingService
from modules.billing.store import InMemoryInvoiceStore

pytestmark = pytest.mark.unit


@pytest.fixture
def billing_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BILLING_CONCURRENT_CHUNKS", "3")
    monkeypatch.setenv("BILLING_MAX_RETRIES", "2")
    monkeypatch.setenv("BILLING_RETRY_BASE_DELAY_SECONDS", "0.5")
    return BillingSettings()


@pytest.fixture
def timer():
    return MagicMock()


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2021, 1, 1, 0, 2, tzinfo=timezone.utc)


class TestBillingService:
    def test_wires_settings_into_components(
        self, payment_provider, invoice_store, timer, billing_settings
    ):
        service = BillingService(payment_provider, invoice_store, timer, settings=billing_settings)

        assert service.dispatcher.concurrent_chunks == 3
        assert service.processor.executor.policy.max_retries == 2
        assert service.processor.executor.policy.base_delay_seconds == pytest.approx(0.5)
        assert service.processor.executor.policy.is_retryable("NETWORK") is True
        assert service.processor.executor.policy.is_retryable("UNKNOWN") is False

    def test_start_scheduling_arms_timer(
        self, payment_provider, invoice_store, timer, billing_settings, fixed_clock
    ):
        service = BillingService(
            payment_provider, invoice_store, timer, settings=billing_settings, clock=fixed_clock
        )

        fire_at = service.start_scheduling()

        assert fire_at == datetime(2021, 2, 1, 0, 1, tzinfo=timezone.utc)
        timer.schedule.assert_called_once()
        assert timer.schedule.call_args.args[0] == fire_at
        assert service.scheduler.state == SchedulerState.ARMED

    def test_stop_scheduling(self, payment_provider, invoice_store, timer, billing_settings):
        service = BillingService(payment_provider, invoice_store, timer, settings=billing_settings)
        service.start_scheduling()

        service.stop_scheduling()

        assert service.scheduler.state == SchedulerState.IDLE

    def test_timer_fire_runs_pending_invoices(
        self, payment_provider, pending_invoices, timer, billing_settings, fixed_clock
    ):
        store = InMemoryInvoiceStore(pending_invoices(7))
        service = BillingService(
            payment_provider, store, timer, settings=billing_settings, clock=fixed_clock
        )
        service.start_scheduling()

        fire = timer.schedule.call_args.args[1]
        fire()

        assert timer.schedule.call_count == 2
        assert payment_provider.charge.call_count == 7
        assert store.fetch_pending() == []

    def test_run_now_uses_injected_sleep_and_jitter(
        self, payment_provider, invoice_factory, timer, billing_settings
    ):
        store = InMemoryInvoiceStore([invoice_factory(id=1)])
        payment_provider.charge.side_effect = NetworkError()
        sleep = MagicMock()
        service = BillingService(
            payment_provider,
            store,
            timer,
            settings=billing_settings,
            sleep=sleep,
            random_between=lambda low, high: high,
        )

        summary = service.run_now(run_id="manual")

        assert summary.run_id == "manual"
        assert summary.failure_reasons == {"NETWORK": 1}
        assert payment_provider.charge.call_count == 3
        assert [call.args[0] for call in sleep.call_args_list] == pytest.approx([0.5, 1.0])
        invoice = store.fetch(1)
        assert invoice.status == InvoiceStatus.FAILED
        assert invoice.failure_reason == FailureReason.NETWORK
