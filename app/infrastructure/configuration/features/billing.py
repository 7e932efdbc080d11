"""Billing run feature settings."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class BillingSettings(FeatureSettings):
    """Recurring billing run configuration.

    Controls how pending invoices are fanned out to the payment provider and
    how transient provider failures are retried.

    Environment Variables:
        BILLING_CONCURRENT_CHUNKS: Number of chunks processed in parallel (default: 10)
        BILLING_MAX_RETRIES: Retries after the first charge attempt (default: 3)
        BILLING_RETRY_BASE_DELAY_SECONDS: Initial backoff delay (default: 0.1s)
        BILLING_RUN_TIMEOUT_SECONDS: Optional deadline for a single run
        BILLING_SCHEDULER_ENABLED: Arm the monthly scheduler at startup (default: True)
        BILLING_SCHEDULER_POLL_INTERVAL_SECONDS: Timer loop poll interval (default: 1s)
        BILLING_SEED_DEMO_DATA: Seed the in-memory store at startup (default: True)

    Exponential Backoff:
        Delay ceiling after failure n: base_delay * (2 ^ (n - 1))
        The actual sleep is drawn uniformly from [0, ceiling] (full jitter).

        Example with defaults (base=0.1s, max_retries=3):
            Failure 1: up to 0.1s
            Failure 2: up to 0.2s
            Failure 3: up to 0.4s
            Failure 4: no retry, invoice fails with reason NETWORK
    """

    concurrent_chunks: int = Field(
        default=10,
        ge=1,
        alias="BILLING_CONCURRENT_CHUNKS",
        description="Number of invoice chunks charged in parallel",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        alias="BILLING_MAX_RETRIES",
        description="Retries after the initial charge attempt on network errors",
    )
    retry_base_delay_seconds: float = Field(
        default=0.1,
        ge=0,
        alias="BILLING_RETRY_BASE_DELAY_SECONDS",
        description="Initial backoff delay before jitter (seconds)",
    )
    run_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        alias="BILLING_RUN_TIMEOUT_SECONDS",
        description="Stop starting new invoices once a run exceeds this duration",
    )
    scheduler_enabled: bool = Field(
        default=True,
        alias="BILLING_SCHEDULER_ENABLED",
        description="Arm the monthly billing scheduler at startup",
    )
    scheduler_poll_interval_seconds: int = Field(
        default=1,
        ge=1,
        alias="BILLING_SCHEDULER_POLL_INTERVAL_SECONDS",
        description="How often the background loop checks for due timers",
    )
    seed_demo_data: bool = Field(
        default=True,
        alias="BILLING_SEED_DEMO_DATA",
        description="Seed the in-memory invoice store with demo invoices",
    )
