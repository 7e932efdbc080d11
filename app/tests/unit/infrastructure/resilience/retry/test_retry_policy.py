"""Unit tests for retry policy configuration."""

import pytest

from infrastructure.resilience.retry import RetryPolicy


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_retries == 3
        assert policy.base_delay_seconds == 0.1
        assert policy.is_retryable("ANYTHING") is True
        assert policy.is_retryable(None) is True

    def test_zero_retries_is_valid(self):
        assert RetryPolicy(max_retries=0).max_retries == 0

    def test_negative_max_retries_rejected(self):
        with pytest.raises(ValueError, match="max_retries"):
            RetryPolicy(max_retries=-1)

    def test_negative_base_delay_rejected(self):
        with pytest.raises(ValueError, match="base_delay_seconds"):
            RetryPolicy(base_delay_seconds=-0.5)

    def test_policy_is_immutable(self):
        policy = RetryPolicy()

        with pytest.raises(AttributeError):
            policy.max_retries = 10  # type: ignore[misc]

    @pytest.mark.parametrize(
        "failures,expected",
        [(1, 0.1), (2, 0.2), (3, 0.4), (4, 0.8)],
    )
    def test_backoff_ceiling_doubles(self, failures, expected):
        policy = RetryPolicy(base_delay_seconds=0.1)

        assert policy.backoff_ceiling(failures) == pytest.approx(expected)

    def test_backoff_ceiling_requires_a_failure(self):
        with pytest.raises(ValueError):
            RetryPolicy().backoff_ceiling(0)
