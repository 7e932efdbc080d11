"""Resilience patterns and implementations.

This module contains resilience-related infrastructure components such as
bounded retry with exponential backoff and jitter.
"""

from infrastructure.resilience.retry import (
    RetryExecutor,
    RetryPolicy,
)

__all__ = [
    "RetryExecutor",
    "RetryPolicy",
]
