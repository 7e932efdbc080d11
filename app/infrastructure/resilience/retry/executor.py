"""Bounded retry executor with exponential backoff and full jitter.

The executor wraps a fallible unit of work that reports its outcome as an
OperationResult. Exponential backoff with full jitter avoids hammering a
struggling remote dependency with synchronized retry storms. See
https://aws.amazon.com/blogs/architecture/exponential-backoff-and-jitter/
"""

import random
import time
from typing import Any, Callable

from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from infrastructure.resilience.retry.config import RetryPolicy

logger = get_module_logger()


class RetryExecutor:
    """Run an action, retrying retryable failures according to a RetryPolicy.

    The first attempt runs immediately. After failure n (1-indexed), when the
    error is retryable and n <= max_retries, the executor sleeps for a value
    drawn uniformly from [0, base_delay * 2 ^ (n - 1)] and tries again.
    Otherwise the failed result is returned as the final value.

    Successful results are never retried, and exceptions raised by the action
    propagate untouched: converting expected failures into results is the
    action's responsibility.

    Attributes:
        policy: RetryPolicy controlling attempts, delays and retryability
    """

    def __init__(
        self,
        policy: RetryPolicy,
        sleep: Callable[[float], None] = time.sleep,
        random_between: Callable[[float, float], float] = random.uniform,
    ) -> None:
        """Initialize the executor.

        Args:
            policy: RetryPolicy to apply to every execution
            sleep: Blocking delay primitive. Injected in tests.
            random_between: Uniform random source over [low, high]. Injected in tests.
        """
        self.policy = policy
        self._sleep = sleep
        self._random_between = random_between

    def execute(
        self,
        action: Callable[[], OperationResult],
        operation: str = "operation",
        **log_context: Any,
    ) -> OperationResult:
        """Execute the action with retries.

        Args:
            action: Callable returning an OperationResult
            operation: Operation name for logging
            **log_context: Extra fields bound to retry log entries

        Returns:
            The first successful result, or the last failed result when the
            error is not retryable or the retry budget is exhausted.
        """
        log = logger.bind(operation=operation, **log_context)
        failures = 0

        while True:
            result = action()
            if result.is_success:
                if failures:
                    log.info("retry_succeeded", attempt=failures + 1)
                return result

            failures += 1
            log.debug(
                "retry_attempt_failed",
                attempt=failures,
                error_code=result.error_code,
                error=result.message,
            )

            if not self.policy.is_retryable(result.error_code):
                return result

            if failures > self.policy.max_retries:
                log.warning(
                    "retry_exhausted",
                    attempts=failures,
                    error_code=result.error_code,
                )
                return result

            delay = self._random_between(0.0, self.policy.backoff_ceiling(failures))
            log.info(
                "retry_scheduled",
                attempt=failures + 1,
                delay_seconds=delay,
            )
            self._sleep(delay)
