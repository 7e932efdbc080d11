"""Errors for the billing module.

The payment provider signals business and transport failures by raising the
provider errors below. The billing run never lets them escape: they are
classified into OperationResult values at the provider boundary.
"""


class BillingError(Exception):
    """Base class for billing errors."""


class InvoiceNotFoundError(BillingError):
    """Raised by the invoice store when an invoice id is unknown."""

    def __init__(self, invoice_id: int):
        super().__init__(f"Invoice '{invoice_id}' was not found")
        self.invoice_id = invoice_id


class PaymentProviderError(BillingError):
    """Base class for failures signalled by the payment provider."""


class CustomerNotFoundError(PaymentProviderError):
    """The provider does not know the invoice's customer."""

    def __init__(self, customer_id: int):
        super().__init__(f"Customer '{customer_id}' was not found")
        self.customer_id = customer_id


class CurrencyMismatchError(PaymentProviderError):
    """The invoice currency does not match the customer's account currency."""

    def __init__(self, invoice_id: int, customer_id: int):
        super().__init__(
            f"Currency of invoice '{invoice_id}' does not match currency of customer '{customer_id}'"
        )
        self.invoice_id = invoice_id
        self.customer_id = customer_id


class NetworkError(PaymentProviderError):
    """A transport-level failure talking to the provider. Safe to retry."""

    def __init__(self, message: str = "A network error happened please try again."):
        super().__init__(message)
