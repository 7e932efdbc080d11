"""Charge outcome classification.

Converts payment provider exceptions into OperationResult values tagged with
an ErrorKind, and maps error kinds to invoice failure reasons. Centralizes
the billing failure taxonomy:

| Situation                     | Retryable | FailureReason      |
|-------------------------------|-----------|--------------------|
| Provider declines the charge  | no        | INSUFFICIENT_FUNDS |
| Customer unknown to provider  | no        | CUSTOMER_NOT_FOUND |
| Currency mismatch             | no        | CURRENCY_MISMATCH  |
| Transient network failure     | yes       | NETWORK            |
| Anything else                 | no        | UNKNOWN            |
"""

from enum import Enum
from typing import Optional

from infrastructure.operations.result import OperationResult
from modules.billing.domain.errors import (
    CurrencyMismatchError,
    CustomerNotFoundError,
    NetworkError,
)
from modules.billing.domain.models import FailureReason, Invoice
from modules.billing.providers.base import PaymentProvider


class ErrorKind(str, Enum):
    """Error kinds carried in OperationResult.error_code for charge attempts."""

    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    NETWORK = "NETWORK"
    UNKNOWN = "UNKNOWN"


_FAILURE_REASONS = {
    ErrorKind.CUSTOMER_NOT_FOUND: FailureReason.CUSTOMER_NOT_FOUND,
    ErrorKind.CURRENCY_MISMATCH: FailureReason.CURRENCY_MISMATCH,
    ErrorKind.NETWORK: FailureReason.NETWORK,
    ErrorKind.UNKNOWN: FailureReason.UNKNOWN,
}


def classify_charge_error(exc: Exception) -> OperationResult:
    """Classify an exception raised by PaymentProvider.charge.

    Args:
        exc: Exception raised by the provider

    Returns:
        OperationResult with TRANSIENT_ERROR for network failures and
        PERMANENT_ERROR otherwise, tagged with the matching ErrorKind.
    """
    if isinstance(exc, NetworkError):
        return OperationResult.transient_error(str(exc), error_code=ErrorKind.NETWORK)

    if isinstance(exc, CustomerNotFoundError):
        return OperationResult.permanent_error(
            str(exc), error_code=ErrorKind.CUSTOMER_NOT_FOUND
        )

    if isinstance(exc, CurrencyMismatchError):
        return OperationResult.permanent_error(
            str(exc), error_code=ErrorKind.CURRENCY_MISMATCH
        )

    return OperationResult.permanent_error(
        f"Unexpected charge error: {type(exc).__name__}: {exc}",
        error_code=ErrorKind.UNKNOWN,
    )


def is_retryable(error_code: Optional[str]) -> bool:
    """Only network failures are retried."""
    return error_code == ErrorKind.NETWORK


def failure_reason_for(error_code: Optional[str]) -> FailureReason:
    """Map an error kind to the failure reason recorded on the invoice.

    Unrecognized or missing codes map to UNKNOWN.
    """
    try:
        kind = ErrorKind(error_code)
    except ValueError:
        return FailureReason.UNKNOWN
    return _FAILURE_REASONS[kind]


def charge_once(provider: PaymentProvider, invoice: Invoice) -> OperationResult:
    """Send a single charge request and report it as an OperationResult.

    A declined charge is not an error: it is a SUCCESS result whose data is
    False. Exceptions raised by the provider are classified, never raised.
    """
    try:
        accepted = provider.charge(invoice)
    except Exception as exc:  # any provider failure becomes a result
        return classify_charge_error(exc)

    if accepted:
        return OperationResult.success(data=True, message="charge accepted")
    return OperationResult.success(data=False, message="charge declined")
