"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.billing import BillingSettings

__all__ = [
    "BillingSettings",
]
