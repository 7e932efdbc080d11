"""Retry policy configuration.

This module defines the immutable policy consumed by the RetryExecutor.
"""

from dataclasses import dataclass
from typing import Callable, Optional


def retry_any_error(error_code: Optional[str]) -> bool:
    """Default retryability predicate: every error is retryable."""
    return True


@dataclass(frozen=True)
class RetryPolicy:
    """Policy controlling bounded retry with exponential backoff.

    Attributes:
        max_retries: Retries allowed after the initial attempt. Total attempts
            never exceed max_retries + 1.
        base_delay_seconds: Backoff ceiling after the first failure. The
            ceiling doubles after every subsequent failure.
        is_retryable: Predicate over the failed result's error code (error kind).

    Example:
        policy = RetryPolicy(
            max_retries=3,
            base_delay_seconds=0.1,
            is_retryable=lambda kind: kind == "NETWORK",
        )
    """

    max_retries: int = 3
    base_delay_seconds: float = 0.1
    is_retryable: Callable[[Optional[str]], bool] = retry_any_error

    def __post_init__(self) -> None:
        """Validate policy values."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be non-negative")

    def backoff_ceiling(self, failures: int) -> float:
        """Maximum delay before the next attempt after `failures` failures.

        Args:
            failures: Number of failed attempts so far (1-indexed)

        Returns:
            base_delay_seconds * 2 ^ (failures - 1)
        """
        if failures < 1:
            raise ValueError("failures must be at least 1")
        return self.base_delay_seconds * (2 ** (failures - 1))
