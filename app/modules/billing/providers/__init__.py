"""Payment provider interface and implementations."""

from modules.billing.providers.base import PaymentProvider
from modules.billing.providers.mock import MockPaymentProvider

__all__ = [
    "PaymentProvider",
    "MockPaymentProvider",
]
