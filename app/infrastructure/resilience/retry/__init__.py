"""Bounded retry for fallible operations.

Architecture:
- RetryPolicy: Immutable max retries, base delay and retryability predicate
- RetryExecutor: Runs an OperationResult-returning action with exponential
  backoff and full jitter between attempts

Usage:
    from infrastructure.resilience.retry import RetryExecutor, RetryPolicy

    policy = RetryPolicy(
        max_retries=3,
        base_delay_seconds=0.1,
        is_retryable=lambda kind: kind == "NETWORK",
    )
    executor = RetryExecutor(policy)
    result = executor.execute(charge_once, operation="charge_invoice")
"""

from infrastructure.resilience.retry.config import RetryPolicy, retry_any_error
from infrastructure.resilience.retry.executor import RetryExecutor

__all__ = [
    "RetryPolicy",
    "RetryExecutor",
    "retry_any_error",
]
