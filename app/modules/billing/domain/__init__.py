"""Domain layer - data models and errors."""

from modules.billing.domain.models import (
    BillingRunSummary,
    Currency,
    Customer,
    FailureReason,
    Invoice,
    InvoiceOutcome,
    InvoiceStatus,
    Money,
)
from modules.billing.domain.errors import (
    BillingError,
    CurrencyMismatchError,
    CustomerNotFoundError,
    InvoiceNotFoundError,
    NetworkError,
    PaymentProviderError,
)

__all__ = [
    "BillingRunSummary",
    "Currency",
    "Customer",
    "FailureReason",
    "Invoice",
    "InvoiceOutcome",
    "InvoiceStatus",
    "Money",
    "BillingError",
    "CurrencyMismatchError",
    "CustomerNotFoundError",
    "InvoiceNotFoundError",
    "NetworkError",
    "PaymentProviderError",
]
