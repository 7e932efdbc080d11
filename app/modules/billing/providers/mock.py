"""Mock payment provider for local runs and demos."""

import random
from typing import Callable, Dict, Iterable, Optional

from modules.billing.domain.errors import CurrencyMismatchError, CustomerNotFoundError
from modules.billing.domain.models import Customer, Invoice


class MockPaymentProvider:
    """Payment provider that accepts charges at random.

    When a customer registry is given, charges are validated against it
    first: an unknown customer raises CustomerNotFoundError and an invoice
    in a currency other than the customer's raises CurrencyMismatchError.

    Attributes:
        acceptance_rate: Probability in [0, 1] that a charge is accepted.
        customers: Known customers by id, or None to accept any customer.
    """

    def __init__(
        self,
        acceptance_rate: float = 0.8,
        random_source: Callable[[], float] = random.random,
        customers: Optional[Iterable[Customer]] = None,
    ) -> None:
        if not 0 <= acceptance_rate <= 1:
            raise ValueError("acceptance_rate must be between 0 and 1")
        self.acceptance_rate = acceptance_rate
        self._random = random_source
        self.customers: Optional[Dict[int, Customer]] = (
            None if customers is None else {customer.id: customer for customer in customers}
        )

    def charge(self, invoice: Invoice) -> bool:
        if self.customers is not None:
            customer = self.customers.get(invoice.customer_id)
            if customer is None:
                raise CustomerNotFoundError(invoice.customer_id)
            if customer.currency != invoice.amount.currency:
                raise CurrencyMismatchError(invoice.id, customer.id)
        return self._random() < self.acceptance_rate
