"""Payment provider interface.

Idempotency contract:
    The billing run retries a charge after a NetworkError. A network error
    may happen after the provider already charged the customer but before
    the response reached us. Retrying is therefore only safe because the
    provider is required to treat the invoice id as an idempotency key and
    to charge a given invoice at most once, however many times the request
    is repeated. This is a contract with the external provider. Nothing in
    this codebase validates it.
"""

from typing import Protocol

from modules.billing.domain.models import Invoice


class PaymentProvider(Protocol):
    """External payment provider used to charge invoices."""

    def charge(self, invoice: Invoice) -> bool:
        """Charge the customer for the invoice amount.

        Args:
            invoice: Invoice to charge. Its id is the idempotency key.

        Returns:
            True when the customer was charged, False when the charge was
            declined (e.g. insufficient funds on the customer's account).

        Raises:
            CustomerNotFoundError: the provider does not know the customer
            CurrencyMismatchError: the currency does not match the customer account
            NetworkError: a transport failure, the request may be retried
        """
        ...
